import struct
from dataclasses import dataclass

from .errors import FormatError, InvalidArgumentError
from .utils import read_u8, read_u16, read_u32

KIF_MAGIC = 0x6B696631  # 'kif1', stored little-endian as b"1fik"
KIF_HEADER_SIZE = 16
KIF_HEADER_FORMAT = "<IBBHHHI"


@dataclass
class KIFHeader:
    """
    The fixed 16 byte header at the start of every .kif stream.

    Layout (little-endian, no padding):
    magic(4), bpp(1), compression(1), palette_entries(2),
    width(2), height(2), rle_entries(4)
    """

    width: int = 0
    height: int = 0
    palette_entries: int = 0
    rle_entries: int = 0
    magic: int = KIF_MAGIC
    bpp: int = 4
    compression: int = 0

    def pack(self) -> bytes:
        try:
            return struct.pack(
                KIF_HEADER_FORMAT,
                self.magic,
                self.bpp,
                self.compression,
                self.palette_entries,
                self.width,
                self.height,
                self.rle_entries,
            )
        except struct.error as e:
            raise InvalidArgumentError(f"KIFHeader.pack: Field out of range ({e})") from e

    @classmethod
    def unpack(cls, data) -> "KIFHeader":
        if data is None or len(data) < KIF_HEADER_SIZE:
            raise FormatError("KIFHeader.unpack: File too short for header")

        magic = read_u32(data, 0)
        if magic != KIF_MAGIC:
            raise FormatError("KIFHeader.unpack: The signature of the KIF file is invalid")

        return cls(
            magic=magic,
            bpp=read_u8(data, 4),
            compression=read_u8(data, 5),
            palette_entries=read_u16(data, 6),
            width=read_u16(data, 8),
            height=read_u16(data, 10),
            rle_entries=read_u32(data, 12),
        )

    @property
    def palette_size(self) -> int:
        """Bytes taken by the palette section."""
        return self.palette_entries * 4

    @property
    def rle_size(self) -> int:
        """Bytes taken by the RLE section."""
        return self.rle_entries * 2

    @property
    def total_size(self) -> int:
        return KIF_HEADER_SIZE + self.palette_size + self.rle_size


def parse_header(data) -> KIFHeader:
    return KIFHeader.unpack(data)


def write_header(header: KIFHeader) -> bytes:
    return header.pack()
