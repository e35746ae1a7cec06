from PIL import Image

from kif import KIF, KIFHeader

INPUT_IMAGE = "icon.png"


def png_to_kif(png_path, kif_path):
    img = Image.open(png_path).convert("RGBA")
    width, height = img.size
    raw_data = img.tobytes()

    written = KIF.write(kif_path, raw_data, KIFHeader(width=width, height=height))
    print(f"Converted {png_path} to {kif_path} ({written} bytes)")


def kif_to_png(kif_path, png_path):
    decoded, header = KIF.read(kif_path, output_bpp=32)

    img = Image.frombytes("RGBA", (header.width, header.height), decoded)
    img.save(png_path)
    print(f"Converted {kif_path} to {png_path}")


if __name__ == "__main__":
    # Example conversions
    png_to_kif(INPUT_IMAGE, "icon_converted.kif")
    kif_to_png("icon_converted.kif", "icon_reconverted.png")
    assert (
        Image.open(INPUT_IMAGE).convert("RGBA").tobytes()
        == Image.open("icon_reconverted.png").tobytes()
    ), "Reconverted image does not match original!"
