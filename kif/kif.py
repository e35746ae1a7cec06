from .decoder import KIFDecoder
from .encoder import KIF_ADDRESSABLE_COLORS, KIF_MAX_RUN, KIFEncoder
from .errors import InvalidArgumentError, KIFIOError
from .header import KIF_HEADER_SIZE, KIF_MAGIC, KIFHeader


class KIF:
    # KIF Constants
    KIF_MAGIC = KIF_MAGIC
    KIF_HEADER_SIZE = KIF_HEADER_SIZE
    KIF_MAX_COLORS = KIF_ADDRESSABLE_COLORS
    KIF_MAX_RUN = KIF_MAX_RUN

    @classmethod
    def encode(cls, pixel_data, width, height):
        """
        Encodes raw RGBA pixel data into KIF format.
        :param pixel_data: bytes-like RGBA data, width * height * 4 bytes
        :param width: image width
        :param height: image height
        :return: (bytes of the encoded KIF data, KIFHeader)
        """
        return KIFEncoder.encode(pixel_data, width, height)

    @classmethod
    def decode(cls, kif_data, output_bpp=32):
        """
        Decodes KIF data into raw pixels.
        :param kif_data: bytes of the .kif file
        :param output_bpp: 24 (RGB) or 32 (RGBA)
        :return: (pixel bytes, KIFHeader)
        """
        return KIFDecoder.decode(kif_data, output_bpp)

    @classmethod
    def read(cls, path, output_bpp=32):
        """Read and decode a .kif file. Open failures propagate as OSError."""
        with open(path, "rb") as f:
            content = f.read()

        if len(content) <= 0:
            raise KIFIOError(f"KIF.read: {path} is empty")

        return cls.decode(content, output_bpp)

    @classmethod
    def write(cls, path, pixel_data, header):
        """
        Encode pixel_data using header's width/height and write it to path.
        :return: number of bytes written
        """
        if header is None:
            raise InvalidArgumentError("KIF.write: No header given")

        encoded, _ = cls.encode(pixel_data, header.width, header.height)

        with open(path, "wb") as f:
            written = f.write(encoded)

        if written != len(encoded):
            raise KIFIOError(f"KIF.write: Short write to {path}")

        return written


def encode(pixel_data, width: int, height: int) -> tuple[bytes, KIFHeader]:
    return KIF.encode(pixel_data, width, height)


def decode(data, output_bpp: int = 32) -> tuple[bytes, KIFHeader]:
    return KIF.decode(data, output_bpp)


def read_file(path, output_bpp: int = 32) -> tuple[bytes, KIFHeader]:
    return KIF.read(path, output_bpp)


def write_file(path, pixel_data, header: KIFHeader) -> int:
    return KIF.write(path, pixel_data, header)
