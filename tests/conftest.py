import numpy as np
import pytest

from ascii_art.image import RasterImage

GLYPH_SIZE = 16

# Inked cells out of GLYPH_SIZE * GLYPH_SIZE for each test glyph
DENSITIES = {
    " ": 0,
    ".": 16,
    ":": 32,
    "-": 32,
    "+": 64,
    "o": 96,
    "x": 128,
    "#": 192,
    "@": 224,
    "M": 256,
}


class FakeRasterizer:
    """Deterministic stand-in for font rendering with known glyph densities."""

    def __init__(self, densities=None):
        self.densities = dict(DENSITIES if densities is None else densities)
        self.calls = []

    def __call__(self, char):
        self.calls.append(char)
        grid = np.zeros(GLYPH_SIZE * GLYPH_SIZE, dtype=bool)
        grid[: self.densities[char]] = True
        return grid.reshape(GLYPH_SIZE, GLYPH_SIZE)

    def raw(self, char):
        return self.densities[char] / (GLYPH_SIZE * GLYPH_SIZE)


@pytest.fixture
def rasterizer():
    return FakeRasterizer()


def solid_image(width, height, colour=(128, 128, 128), identity=None):
    pixels = np.empty((height, width, 3), dtype=np.uint8)
    pixels[:] = colour
    return RasterImage.from_array(pixels, identity)


def gradient_image(width, height, identity=None):
    """Horizontal black-to-white ramp."""
    ramp = np.linspace(0, 255, width).astype(np.uint8)
    pixels = np.repeat(np.tile(ramp, (height, 1))[:, :, None], 3, axis=2)
    return RasterImage.from_array(pixels, identity)


@pytest.fixture
def make_solid():
    return solid_image


@pytest.fixture
def make_gradient():
    return gradient_image
