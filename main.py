from kif import KIF, load_image

INPUT_IMAGE = "icon.png"
OUTPUT_KIF = "icon.kif"

if __name__ == "__main__":
    pixel_data, desc = load_image(INPUT_IMAGE)
    print(
        f"Loaded image {INPUT_IMAGE}: {desc['width']}x{desc['height']} Channels: {desc['channels']}"
    )
    print(f"Original {INPUT_IMAGE} {pixel_data.nbytes} bytes")

    encoded, header = KIF.encode(pixel_data.tobytes(), desc["width"], desc["height"])

    with open(OUTPUT_KIF, "wb") as f:
        f.write(encoded)

    print(
        f"Encoded KIF to {len(encoded)} bytes "
        f"({header.palette_entries} colors, {header.rle_entries} runs)"
    )
