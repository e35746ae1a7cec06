from .errors import (
    FormatError,
    InvalidArgumentError,
    PaletteIndexError,
    TruncatedDataError,
)
from .header import KIF_HEADER_SIZE, KIFHeader


class KIFDecoder:
    """
    A class to decode KIF (Kompakt Icon Format) files into raw pixel data.
    """

    @staticmethod
    def decode(file_data, output_bpp: int = 32) -> tuple[bytes, KIFHeader]:
        """
        Decode a KIF file given as a bytes/bytearray object.

        :param file_data: Bytes containing the KIF file.
        :param output_bpp: 24 for RGB output, 32 for RGBA output.
        :return: Tuple of (pixel data bytes, parsed header).
        """
        if file_data is None:
            raise InvalidArgumentError("KIF.decode: No data given")

        if isinstance(file_data, (int, str)):
            raise InvalidArgumentError("KIF.decode: Data must be a bytes-like object")

        if output_bpp not in (24, 32):
            raise InvalidArgumentError(
                "KIF.decode: The bits per pixel for the output must be 24 or 32"
            )

        try:
            data = memoryview(bytes(file_data))
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(f"KIF.decode: Data is not a byte buffer ({e})") from e

        # --- Header Parsing ---
        header = KIFHeader.unpack(data)

        # --- Validation ---
        if header.bpp not in (3, 4):
            raise FormatError(
                "KIF.decode: The bits per pixel declared in the file is invalid"
            )

        if header.compression != 0:
            raise FormatError(
                "KIF.decode: The compression method declared in the file is not supported"
            )

        if len(data) < header.total_size:
            raise FormatError(
                f"KIF.decode: File declares {header.total_size} bytes but holds {len(data)}"
            )

        # --- Palette ---
        palette_start = KIF_HEADER_SIZE
        palette = [
            tuple(data[i : i + 4])
            for i in range(palette_start, palette_start + header.palette_size, 4)
        ]

        # --- RLE entries ---
        rle_start = palette_start + header.palette_size
        entries = [
            (data[i], data[i + 1])
            for i in range(rle_start, rle_start + header.rle_size, 2)
        ]

        pixels = KIFDecoder.run_length_decode(
            palette, entries, header.width * header.height, output_bpp
        )
        return pixels, header

    @staticmethod
    def run_length_decode(palette, entries, total_pixels: int, output_bpp: int = 32) -> bytes:
        """Expand (palette index, run length) pairs into RGB or RGBA pixels."""
        channels = 4 if output_bpp == 32 else 3
        result = bytearray()
        pixels_processed = 0

        for index, run in entries:
            if index >= len(palette):
                raise PaletteIndexError(
                    f"KIF.decode: Palette index {index} is out of range "
                    f"(palette has {len(palette)} entries)"
                )

            if pixels_processed + run > total_pixels:
                raise FormatError("KIF.decode: RLE data covers more pixels than the image")

            result.extend(bytes(palette[index][:channels]) * run)
            pixels_processed += run

        if pixels_processed < total_pixels:
            raise TruncatedDataError(
                f"KIF.decode: Incomplete image ({pixels_processed} of {total_pixels} pixels)"
            )

        return bytes(result)
