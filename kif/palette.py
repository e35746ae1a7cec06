from typing import Optional, Sequence

from .errors import PaletteOverflowError

TRANSPARENT_BLACK = (0, 0, 0, 0)
PALETTE_MAX_ENTRIES = 65536  # Logical capacity of the header field


def iter_pixels(pixel_data, total_pixels: int):
    """Yield (r, g, b, a) tuples for the first total_pixels RGBA pixels."""
    for i in range(0, total_pixels * 4, 4):
        yield (
            pixel_data[i],
            pixel_data[i + 1],
            pixel_data[i + 2],
            pixel_data[i + 3],
        )


def build_palette(
    pixel_data, width: int, height: int, max_colors: int = PALETTE_MAX_ENTRIES
) -> list[tuple[int, int, int, int]]:
    """
    Build the palette for an RGBA pixel buffer.

    Index 0 is always transparent black; every other distinct color follows in
    the order it first appears (row-major).

    :param pixel_data: Bytes-like RGBA data, at least width * height * 4 bytes.
    :param width: Image width.
    :param height: Image height.
    :param max_colors: Palette capacity, including the reserved entry 0.
    :return: List of (r, g, b, a) tuples.
    :raises PaletteOverflowError: If the image needs more than max_colors entries.
    """
    palette = [TRANSPARENT_BLACK]
    seen = {TRANSPARENT_BLACK}

    for color in iter_pixels(pixel_data, width * height):
        if color in seen:
            continue

        if len(palette) >= max_colors:
            raise PaletteOverflowError(
                f"KIF.encode: Image has more than {max_colors - 1} distinct colors "
                f"besides transparent black"
            )

        seen.add(color)
        palette.append(color)

    return palette


def find_index(color, palette: Sequence) -> Optional[int]:
    """Return the index of color in palette, or None if it is not there."""
    for index, entry in enumerate(palette):
        if entry == color:
            return index
    return None
