import struct

import numpy as np
from PIL import Image

from .errors import FormatError, InvalidArgumentError


def _check_bounds(name: str, buffer, offset: int, size: int) -> None:
    if offset < 0 or offset + size > len(buffer):
        raise FormatError(
            f"{name}: Need {size} bytes at offset {offset}, buffer holds {len(buffer)}"
        )


def read_u8(buffer, offset: int) -> int:
    """Read an unsigned byte at offset."""
    _check_bounds("read_u8", buffer, offset, 1)
    return buffer[offset]


def read_u16(buffer, offset: int) -> int:
    """Read a little-endian 16-bit unsigned integer at offset."""
    _check_bounds("read_u16", buffer, offset, 2)
    return struct.unpack_from("<H", buffer, offset)[0]


def read_u32(buffer, offset: int) -> int:
    """Read a little-endian 32-bit unsigned integer at offset."""
    _check_bounds("read_u32", buffer, offset, 4)
    return struct.unpack_from("<I", buffer, offset)[0]


def load_image(filepath: str) -> tuple[np.ndarray, dict]:
    """Load an image as RGBA pixel data (numpy array) + description."""

    ext = filepath.lower().split(".")[-1]

    if ext in ("dng", "cr2", "nef", "arw", "raw"):
        # RAW formats - requires rawpy
        import rawpy

        with rawpy.imread(filepath) as raw:
            rgb = raw.postprocess()
        img = Image.fromarray(rgb)
    else:
        # Standard formats (PNG, JPEG, ICO, etc.)
        img = Image.open(filepath)

    # KIF always encodes RGBA
    if img.mode != "RGBA":
        img = img.convert("RGBA")

    return np.array(img), {
        "width": img.size[0],
        "height": img.size[1],
        "channels": 4,
    }


def save_image(filepath: str, pixel_data, width: int, height: int, bpp: int = 32):
    """Write raw RGB (bpp=24) or RGBA (bpp=32) pixels to any format Pillow supports."""
    if bpp not in (24, 32):
        raise InvalidArgumentError("save_image: bpp must be 24 or 32")

    mode = "RGBA" if bpp == 32 else "RGB"
    img = Image.frombytes(mode, (width, height), bytes(pixel_data))
    img.save(filepath)
    return img
