from .decoder import KIFDecoder
from .encoder import KIFEncoder
from .errors import (
    FormatError,
    InvalidArgumentError,
    KIFError,
    KIFIOError,
    PaletteIndexError,
    PaletteLookupError,
    PaletteOverflowError,
    TruncatedDataError,
)
from .header import KIFHeader, parse_header, write_header
from .kif import KIF, decode, encode, read_file, write_file
from .palette import build_palette, find_index
from .utils import load_image, save_image

__all__ = [
    "KIF",
    "KIFEncoder",
    "KIFDecoder",
    "KIFHeader",
    "parse_header",
    "write_header",
    "build_palette",
    "find_index",
    "encode",
    "decode",
    "read_file",
    "write_file",
    "load_image",
    "save_image",
    "KIFError",
    "InvalidArgumentError",
    "PaletteOverflowError",
    "FormatError",
    "TruncatedDataError",
    "PaletteIndexError",
    "PaletteLookupError",
    "KIFIOError",
]
