#! KIF is pure Python while Pillow's PNG and the qoi package are C, so the timings only say so much.
#! The interesting number here is the output size for small, flat icons.

import io

import numpy as np
from PIL import Image

import qoi as OfficialQOI
from kif import KIF, load_image

INPUT_IMAGE = "icon.png"


def size_compare(pixel_data: np.ndarray):
    import time

    height, width = pixel_data.shape[:2]

    # KIF (our implementation)
    start_time = time.time()
    encoded, header = KIF.encode(pixel_data.tobytes(), width, height)
    end_time = time.time()
    print(
        f"Encoded KIF to {len(encoded)} bytes in {end_time - start_time:.4f} seconds "
        f"({header.palette_entries} colors, {header.rle_entries} runs)"
    )

    # QOI (C extension)
    start_time = time.time()
    qoi_encoded = OfficialQOI.encode(pixel_data)
    end_time = time.time()
    print(f"Encoded QOI to {len(qoi_encoded)} bytes in {end_time - start_time:.4f} seconds")

    # PNG in C using Pillow
    start_time = time.time()
    buffer = io.BytesIO()
    Image.fromarray(pixel_data).save(buffer, format="PNG")
    end_time = time.time()
    print(f"Encoded PNG to {buffer.tell()} bytes in {end_time - start_time:.4f} seconds")


if __name__ == "__main__":
    pixel_data, desc = load_image(INPUT_IMAGE)
    print(
        f"Loaded image {INPUT_IMAGE}: {desc['width']}x{desc['height']} Channels: {desc['channels']}"
    )
    print(f"Original {INPUT_IMAGE} {pixel_data.nbytes} bytes")

    size_compare(pixel_data)
