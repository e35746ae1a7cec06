class KIFError(Exception):
    """Base class for every error raised by the KIF codec."""


class InvalidArgumentError(KIFError, ValueError):
    """A caller supplied a missing buffer, a bad size or an unsupported bit depth."""


class PaletteOverflowError(InvalidArgumentError):
    """The image has more distinct colors than the palette can address."""


class FormatError(KIFError, ValueError):
    """The byte stream is too short or structurally inconsistent."""


class TruncatedDataError(FormatError):
    """The RLE entries cover fewer pixels than width * height."""


class PaletteIndexError(KIFError, IndexError):
    """An RLE entry points past the end of the palette."""


class PaletteLookupError(KIFError, RuntimeError):
    """A pixel color was missing from the palette built from the same pixels."""


class KIFIOError(KIFError, OSError):
    """A KIF file could not be used (e.g. it is empty)."""
