import numpy as np

from ascii_art.image import RasterImage

BACKGROUND = (255, 255, 255)


def is_power_of_two(n: int) -> bool:
    return n > 0 and n & (n - 1) == 0


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n."""
    if n < 1:
        raise ValueError(f"Expected a positive length, got {n}")
    return 1 << (n - 1).bit_length()


def padded_size(width: int, height: int) -> tuple[int, int]:
    return next_power_of_two(width), next_power_of_two(height)


def pad_image(image: RasterImage) -> RasterImage:
    """Center the image on a white canvas whose sides are powers of two.

    Images that already have power-of-two sides are returned as-is.
    """
    width, height = padded_size(image.width, image.height)
    if (width, height) == (image.width, image.height):
        return image

    top = (height - image.height) // 2
    left = (width - image.width) // 2
    canvas = np.empty((height, width, 3), dtype=np.uint8)
    canvas[:] = BACKGROUND
    canvas[top : top + image.height, left : left + image.width] = image.pixels
    return RasterImage(canvas, image.identity)
