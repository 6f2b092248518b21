import operator

import numpy as np

from ascii_art.errors import ConfigurationError
from ascii_art.image import RasterImage
from ascii_art.padding import is_power_of_two

# ITU-R BT.709 luma coefficients for R, G, B
LUMA_WEIGHTS = np.array([0.2126, 0.7152, 0.0722])
MAX_CHANNEL = 255.0


def resolution_bounds(width: int, height: int) -> tuple[int, int]:
    """Inclusive (min, max) blocks per row for a padded image.

    Below the minimum a block would be taller than the image; above the
    maximum it would be narrower than one pixel.
    """
    return max(1, width // height), width


def as_resolution(resolution) -> int:
    """Return ``resolution`` as a plain int, or raise if it isn't a positive power of two.

    Any integer type is accepted (numpy integers included) except bool.
    """
    try:
        value = operator.index(resolution)
    except TypeError:
        value = None
    if value is None or isinstance(resolution, bool) or not is_power_of_two(value):
        raise ConfigurationError(f"Resolution must be a positive power of two, got {resolution!r}")
    return value


def check_resolution(width: int, height: int, resolution: int) -> int:
    resolution = as_resolution(resolution)
    lo, hi = resolution_bounds(width, height)
    if not lo <= resolution <= hi:
        raise ConfigurationError(f"Resolution {resolution} out of bounds [{lo}, {hi}] for a {width}x{height} image")
    return resolution


def block_side(width: int, resolution: int) -> int:
    return width // resolution


def partition(image: RasterImage, resolution: int) -> np.ndarray:
    """Split a padded image into square blocks.

    Returns a view of shape (rows, cols, side, side, 3) where block (r, c)
    holds pixels [r*side, (r+1)*side) x [c*side, (c+1)*side).
    """
    resolution = check_resolution(image.width, image.height, resolution)
    side = block_side(image.width, resolution)
    rows = image.height // side
    cols = resolution
    # (rows, side, cols, side, 3) -> (rows, cols, side, side, 3)
    return image.pixels.reshape(rows, side, cols, side, 3).transpose(0, 2, 1, 3, 4)


def luminance(pixels: np.ndarray) -> np.ndarray:
    """Weighted grayscale value of each RGB pixel, in 0-255."""
    return np.asarray(pixels, dtype=np.float64) @ LUMA_WEIGHTS


def block_brightness(block: np.ndarray) -> float:
    """Mean luminance of a block, normalized to [0, 1]."""
    return float(np.clip(luminance(block).mean() / MAX_CHANNEL, 0.0, 1.0))


def brightness_grid(image: RasterImage, resolution: int) -> np.ndarray:
    """Brightness of every block at once. Returns array of shape (rows, cols)."""
    blocks = partition(image, resolution)
    grid = luminance(blocks).mean(axis=(2, 3)) / MAX_CHANNEL
    return np.clip(grid, 0.0, 1.0)
