from .errors import InvalidArgumentError, PaletteLookupError
from .header import KIFHeader
from .palette import build_palette, find_index

# RLE entries store the palette index in a single byte
KIF_ADDRESSABLE_COLORS = 256
KIF_MAX_RUN = 255
KIF_MAX_DIMENSION = 65535


class KIFEncoder:
    @staticmethod
    def encode(pixel_data, width: int, height: int) -> tuple[bytes, KIFHeader]:
        """
        Encode a KIF file.

        :param pixel_data: Bytes-like object (bytes, bytearray, list of ints, uint8 array)
                           containing width * height RGBA pixels.
        :param width: Image width, 1..65535.
        :param height: Image height, 1..65535.
        :return: Tuple of (bytes of the KIF file, the header that was written).
        """
        # --- Validation ---
        if pixel_data is None or isinstance(pixel_data, (int, str)):
            raise InvalidArgumentError("KIF.encode: colorData is missing")

        if not (0 < width <= KIF_MAX_DIMENSION):
            raise InvalidArgumentError("KIF.encode: Invalid width")

        if not (0 < height <= KIF_MAX_DIMENSION):
            raise InvalidArgumentError("KIF.encode: Invalid height")

        try:
            data = bytes(pixel_data)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(f"KIF.encode: colorData is not a byte buffer ({e})") from e

        if len(data) != width * height * 4:
            raise InvalidArgumentError("KIF.encode: The length of colorData is incorrect")

        palette = build_palette(data, width, height, max_colors=KIF_ADDRESSABLE_COLORS)
        entries = KIFEncoder.run_length_encode(data, palette)

        # Magic, bpp and compression are always the canonical values
        header = KIFHeader(
            width=width,
            height=height,
            palette_entries=len(palette),
            rle_entries=len(entries),
        )

        result = bytearray(header.pack())

        for color in palette:
            result.extend(color)

        for index, run in entries:
            result.append(index)
            result.append(run)

        return bytes(result), header

    @staticmethod
    def run_length_encode(data: bytes, palette) -> list[tuple[int, int]]:
        """
        Collapse runs of identical RGBA pixels into (palette index, run length) pairs.

        Runs are capped at 255 pixels; longer runs are split over several entries.
        """
        entries = []
        total_pixels = len(data) // 4
        pos = 0

        while pos < total_pixels:
            offset = pos * 4
            pixel = data[offset : offset + 4]

            run = 1
            while (
                run < KIF_MAX_RUN
                and pos + run < total_pixels
                and data[offset + run * 4 : offset + run * 4 + 4] == pixel
            ):
                run += 1

            index = find_index(tuple(pixel), palette)
            if index is None:
                raise PaletteLookupError(
                    f"KIF.encode: Color {tuple(pixel)} at pixel {pos} is not in the palette"
                )
            if index >= KIF_ADDRESSABLE_COLORS:
                raise PaletteLookupError(
                    f"KIF.encode: Palette index {index} does not fit in an RLE entry"
                )

            entries.append((index, run))
            pos += run

        return entries
