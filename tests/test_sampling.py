import numpy as np
import pytest

from ascii_art.errors import ConfigurationError
from ascii_art.image import RasterImage
from ascii_art.sampling import (
    block_brightness,
    brightness_grid,
    check_resolution,
    luminance,
    partition,
    resolution_bounds,
)


def _random_image(width, height, seed=0):
    rng = np.random.default_rng(seed)
    return RasterImage.from_array(rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8))


def test_partition_shape():
    blocks = partition(_random_image(16, 8), 4)
    assert blocks.shape == (2, 4, 4, 4, 3)


def test_partition_block_contents():
    img = _random_image(16, 8)
    blocks = partition(img, 4)
    np.testing.assert_array_equal(blocks[1, 2], img.pixels[4:8, 8:12])


def test_partition_covers_every_pixel_once():
    img = _random_image(32, 16, seed=3)
    blocks = partition(img, 8)
    rows, cols, side, _, _ = blocks.shape
    assert rows * cols * side * side == img.width * img.height

    rebuilt = blocks.transpose(0, 2, 1, 3, 4).reshape(img.height, img.width, 3)
    np.testing.assert_array_equal(rebuilt, img.pixels)


def test_resolution_bounds():
    assert resolution_bounds(64, 16) == (4, 64)
    assert resolution_bounds(16, 64) == (1, 16)


@pytest.mark.parametrize("resolution", [0, 3, 6, -2])
def test_resolution_must_be_power_of_two(resolution):
    with pytest.raises(ConfigurationError, match="power of two"):
        check_resolution(16, 16, resolution)


@pytest.mark.parametrize("resolution", [True, 2.0, "4", None])
def test_resolution_must_be_an_integer(resolution):
    with pytest.raises(ConfigurationError, match="power of two"):
        check_resolution(16, 16, resolution)


@pytest.mark.parametrize("resolution", [np.int64(4), np.uint8(4)])
def test_numpy_integer_resolution(resolution):
    assert check_resolution(16, 16, resolution) == 4
    assert type(check_resolution(16, 16, resolution)) is int
    assert partition(_random_image(16, 16), resolution).shape == (4, 4, 4, 4, 3)


def test_resolution_above_width_rejected():
    with pytest.raises(ConfigurationError, match="out of bounds"):
        partition(_random_image(8, 8), 16)


def test_resolution_below_minimum_rejected():
    # 64x4 image: one row of blocks needs side <= 4, so at least 16 blocks per row
    with pytest.raises(ConfigurationError, match="out of bounds"):
        check_resolution(64, 4, 8)
    check_resolution(64, 4, 16)


def test_luminance_weights():
    pixels = np.array([[255, 0, 0], [0, 255, 0], [0, 0, 255]], dtype=np.uint8)
    np.testing.assert_allclose(luminance(pixels), [0.2126 * 255, 0.7152 * 255, 0.0722 * 255])


def test_block_brightness_extremes():
    white = np.full((4, 4, 3), 255, dtype=np.uint8)
    black = np.zeros((4, 4, 3), dtype=np.uint8)
    assert block_brightness(white) == pytest.approx(1.0)
    assert block_brightness(black) == 0.0


def test_block_brightness_mid_gray():
    gray = np.full((2, 2, 3), 128, dtype=np.uint8)
    assert block_brightness(gray) == pytest.approx(128 / 255)


def test_brightness_grid_matches_per_block():
    img = _random_image(16, 16, seed=11)
    grid = brightness_grid(img, 4)
    blocks = partition(img, 4)
    assert grid.shape == (4, 4)
    for r in range(4):
        for c in range(4):
            assert grid[r, c] == pytest.approx(block_brightness(blocks[r, c]))


def test_brightness_grid_in_unit_range():
    grid = brightness_grid(_random_image(64, 32, seed=5), 16)
    assert grid.min() >= 0.0
    assert grid.max() <= 1.0


def test_brightness_grid_white_is_one():
    img = RasterImage.from_array(np.full((8, 8, 3), 255, dtype=np.uint8))
    np.testing.assert_allclose(brightness_grid(img, 2), 1.0)
