"""Image builders and fixed addresses shared by the tests."""

from __future__ import annotations

import os

from PIL import Image

CHECKSUM_ADDRESS = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
LOWERCASE_ADDRESS = CHECKSUM_ADDRESS.lower()


def solid_image(width: int, height: int) -> Image.Image:
    return Image.new("RGBA", (width, height), (20, 120, 200, 255))


def gradient_image(width: int, height: int) -> Image.Image:
    image = Image.new("RGB", (width, height))
    image.putdata([((x * 7) % 256, (y * 3) % 256, 90) for y in range(height) for x in range(width)])
    return image


def noise_image(width: int, height: int) -> Image.Image:
    return Image.frombytes("RGB", (width, height), os.urandom(width * height * 3))
