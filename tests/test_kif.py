import numpy as np
import pytest
from PIL import Image

from kif import (
    KIF,
    FormatError,
    InvalidArgumentError,
    KIFHeader,
    KIFIOError,
    PaletteIndexError,
    PaletteOverflowError,
    TruncatedDataError,
    decode,
    encode,
    load_image,
    read_file,
    save_image,
    write_file,
)


def make_icon(width=16, height=16, colors=None) -> np.ndarray:
    """A small RGBA test image built from horizontal stripes of the given colors."""
    if colors is None:
        colors = [(255, 0, 0, 255), (0, 255, 0, 128), (0, 0, 255, 255), (0, 0, 0, 0)]
    img = np.zeros((height, width, 4), dtype=np.uint8)
    for y in range(height):
        img[y, :] = colors[(y // 3) % len(colors)]
    return img


def rle_entries(encoded: bytes, header: KIFHeader):
    start = 16 + header.palette_entries * 4
    return [
        (encoded[i], encoded[i + 1]) for i in range(start, start + header.rle_entries * 2, 2)
    ]


def test_round_trip():
    """Verify that our KIF implementation is lossless for a striped icon."""
    img = make_icon(20, 13)
    encoded, header = KIF.encode(img.tobytes(), 20, 13)

    decoded, decoded_header = KIF.decode(encoded, 32)
    assert decoded == img.tobytes(), "Decoded data mismatch!"
    assert decoded_header == header


def test_round_trip_random_colors():
    rng = np.random.default_rng(1234)
    colors = rng.integers(0, 256, size=(200, 4), dtype=np.uint8)
    img = colors[rng.integers(0, 200, size=(32, 32))]

    encoded, _ = encode(img, 32, 32)
    decoded, header = decode(encoded)
    assert decoded == img.tobytes()
    assert (header.width, header.height) == (32, 32)


def test_run_coverage():
    img = make_icon(40, 30)
    encoded, header = encode(img.tobytes(), 40, 30)
    entries = rle_entries(encoded, header)

    assert len(entries) == header.rle_entries
    assert sum(run for _, run in entries) == 40 * 30
    assert all(1 <= run <= 255 for _, run in entries)


def test_palette_is_unique_and_starts_with_transparent_black():
    img = make_icon(16, 16, colors=[(9, 9, 9, 255), (0, 0, 0, 0), (9, 9, 9, 255), (1, 2, 3, 4)])
    encoded, header = encode(img.tobytes(), 16, 16)

    palette = [
        tuple(encoded[i : i + 4]) for i in range(16, 16 + header.palette_entries * 4, 4)
    ]
    assert palette[0] == (0, 0, 0, 0)
    assert len(set(palette)) == len(palette)
    assert palette == [(0, 0, 0, 0), (9, 9, 9, 255), (1, 2, 3, 4)]


def test_header_fields_are_canonical():
    img = make_icon(8, 8)
    encoded, header = encode(img.tobytes(), 8, 8)

    assert encoded[:4] == b"1fik"
    assert header.magic == 0x6B696631
    assert header.bpp == 4
    assert header.compression == 0
    assert len(encoded) == 16 + header.palette_entries * 4 + header.rle_entries * 2


def test_rgb_projection():
    img = make_icon(12, 9)
    encoded, _ = encode(img.tobytes(), 12, 9)

    rgba, _ = decode(encoded, 32)
    rgb, _ = decode(encoded, 24)
    assert len(rgb) == 3 * 12 * 9
    assert rgb == np.frombuffer(rgba, dtype=np.uint8).reshape(-1, 4)[:, :3].tobytes()


def test_single_color_image():
    img = np.full((10, 10, 4), (10, 20, 30, 255), dtype=np.uint8)
    encoded, header = encode(img.tobytes(), 10, 10)

    assert header.palette_entries == 2
    assert header.rle_entries == 1
    assert rle_entries(encoded, header) == [(1, 100)]


def test_long_run_is_split():
    img = np.full((16, 16, 4), (200, 100, 50, 255), dtype=np.uint8)
    encoded, header = encode(img.tobytes(), 16, 16)

    assert rle_entries(encoded, header) == [(1, KIF.KIF_MAX_RUN), (1, 1)]


@pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (0, 0), (70000, 1)])
def test_zero_or_oversized_dimensions_rejected(width, height):
    with pytest.raises(InvalidArgumentError):
        encode(b"", width, height)


def test_buffer_size_mismatch_rejected():
    with pytest.raises(InvalidArgumentError):
        encode(bytes(10 * 10 * 3), 10, 10)

    with pytest.raises(InvalidArgumentError):
        encode(None, 1, 1)

    with pytest.raises(InvalidArgumentError):
        encode([256, 0, 0, 0], 1, 1)


def test_too_many_colors_rejected():
    # 300 distinct opaque colors on a 300x1 strip
    img = np.zeros((1, 300, 4), dtype=np.uint8)
    img[0, :, 0] = np.arange(300) % 256
    img[0, :, 1] = np.arange(300) // 256
    img[0, :, 3] = 255

    with pytest.raises(PaletteOverflowError):
        encode(img.tobytes(), 300, 1)


def test_255_colors_plus_transparent_black_fit():
    img = np.zeros((1, 256, 4), dtype=np.uint8)
    img[0, :255, 0] = np.arange(1, 256)
    img[0, :255, 3] = 255

    encoded, header = encode(img.tobytes(), 256, 1)
    assert header.palette_entries == 256
    assert decode(encoded)[0] == img.tobytes()


def test_256_opaque_colors_rejected():
    # Transparent black always takes slot 0, leaving 255 slots for the image
    img = np.zeros((1, KIF.KIF_MAX_COLORS, 4), dtype=np.uint8)
    img[0, :, 0] = np.arange(KIF.KIF_MAX_COLORS)
    img[0, :, 3] = 255

    with pytest.raises(PaletteOverflowError):
        encode(img.tobytes(), KIF.KIF_MAX_COLORS, 1)


def test_invalid_output_bpp():
    encoded, _ = encode(make_icon(4, 4).tobytes(), 4, 4)
    with pytest.raises(InvalidArgumentError):
        decode(encoded, 16)


def test_decode_rejects_non_bytes():
    with pytest.raises(InvalidArgumentError):
        decode("1fik")

    with pytest.raises(InvalidArgumentError):
        decode(None)


def test_truncated_stream_rejected():
    encoded, _ = encode(make_icon(16, 16).tobytes(), 16, 16)

    for cut in (0, 10, 16, 20, len(encoded) - 1):
        with pytest.raises(FormatError):
            decode(encoded[:cut])


def test_bad_magic_rejected():
    encoded, _ = encode(make_icon(4, 4).tobytes(), 4, 4)
    with pytest.raises(FormatError):
        decode(b"qoif" + encoded[4:])


def test_short_rle_data_is_truncated():
    header = KIFHeader(width=4, height=4, palette_entries=2, rle_entries=1)
    data = header.pack() + bytes((0, 0, 0, 0, 1, 2, 3, 255)) + bytes((1, 10))

    with pytest.raises(TruncatedDataError):
        decode(data)


def test_palette_index_out_of_range():
    header = KIFHeader(width=2, height=2, palette_entries=1, rle_entries=1)
    data = header.pack() + bytes(4) + bytes((5, 4))

    with pytest.raises(PaletteIndexError):
        decode(data)


def test_runs_past_image_end_rejected():
    header = KIFHeader(width=2, height=2, palette_entries=1, rle_entries=1)
    data = header.pack() + bytes(4) + bytes((0, 9))

    with pytest.raises(FormatError):
        decode(data)


def test_zero_runs_and_trailing_bytes():
    header = KIFHeader(width=2, height=1, palette_entries=2, rle_entries=3)
    data = (
        header.pack()
        + bytes((0, 0, 0, 0, 1, 2, 3, 255))
        + bytes((1, 0, 1, 1, 0, 1))
        + b"junk"
    )

    decoded, decoded_header = decode(data)
    assert decoded == bytes((1, 2, 3, 255, 0, 0, 0, 0))
    assert decoded_header == header


def test_file_round_trip(tmp_path):
    img = make_icon(24, 24)
    path = tmp_path / "icon.kif"

    written = write_file(path, img.tobytes(), KIFHeader(width=24, height=24))
    assert written == path.stat().st_size

    decoded, header = read_file(path)
    assert decoded == img.tobytes()
    assert (header.width, header.height) == (24, 24)


def test_read_empty_file(tmp_path):
    path = tmp_path / "empty.kif"
    path.write_bytes(b"")

    with pytest.raises(KIFIOError):
        read_file(path)


def test_read_missing_file(tmp_path):
    with pytest.raises(OSError):
        read_file(tmp_path / "missing.kif")


def test_png_round_trip(tmp_path):
    """PNG -> KIF -> PNG through Pillow keeps every pixel."""
    png_path = str(tmp_path / "icon.png")
    Image.fromarray(make_icon(32, 32)).save(png_path)

    pixel_data, desc = load_image(png_path)
    encoded, _ = KIF.encode(pixel_data.tobytes(), desc["width"], desc["height"])
    decoded, header = KIF.decode(encoded)

    out_path = str(tmp_path / "out.png")
    save_image(out_path, decoded, header.width, header.height)
    assert Image.open(out_path).tobytes() == Image.open(png_path).convert("RGBA").tobytes()


def test_matches_reference_qoi():
    """Our lossless round trip agrees with the qoi reference codec."""
    OfficialQOI = pytest.importorskip("qoi")
    img = make_icon(64, 48)

    expected = OfficialQOI.decode(OfficialQOI.encode(img))

    encoded, header = encode(img.tobytes(), 64, 48)
    decoded, _ = decode(encoded)
    our_decoded_array = np.frombuffer(decoded, dtype=np.uint8).reshape(
        header.height, header.width, 4
    )
    assert np.array_equal(expected, our_decoded_array), "Decoded data mismatch!"
