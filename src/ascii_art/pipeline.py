"""Image to character-grid conversion.

pad → partition → per-block brightness → glyph lookup. The padded image and the
brightness matrix from the previous run are kept so that repeating a run with
the same image and resolution only redoes the lookup.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from ascii_art.charsets import validate_characters
from ascii_art.engine import CharGrid, Rasterizer
from ascii_art.image import RasterImage
from ascii_art.padding import pad_image, padded_size
from ascii_art.sampling import brightness_grid, check_resolution
from ascii_art.table import CharBrightnessTable, RoundingMode

logger = logging.getLogger(__name__)


@dataclass
class RunCache:
    identity: str | None = None
    resolution: int | None = None
    shape: tuple[int, int] | None = None  # (height, width) of the source image
    padded: RasterImage | None = None
    brightness: np.ndarray | None = None  # (rows, cols) float64, read-only

    def matches(self, image: RasterImage, resolution: int) -> bool:
        return (
            self.brightness is not None
            and self.identity == image.identity
            and self.shape == (image.height, image.width)
            and self.resolution == resolution
        )

    def clear(self) -> None:
        self.identity = None
        self.resolution = None
        self.shape = None
        self.padded = None
        self.brightness = None


class ConversionPipeline:
    def __init__(self, rasterizer: Rasterizer | None = None, rounding: RoundingMode | str = RoundingMode.NEAREST):
        self.rasterizer = rasterizer
        self.rounding = RoundingMode(rounding)
        self.cache = RunCache()
        self.table: CharBrightnessTable | None = None

    def convert(
        self,
        image: RasterImage,
        characters: Iterable[str],
        resolution: int,
        rounding: RoundingMode | str | None = None,
    ) -> CharGrid:
        """Convert an image to a grid with ``resolution`` characters per row.

        Raises ConfigurationError or InvalidCharacterError without touching the
        cache or the glyph table.
        """
        rounding = self.rounding if rounding is None else RoundingMode(rounding)
        width, height = padded_size(image.width, image.height)
        resolution = check_resolution(width, height, resolution)

        if self.cache.matches(image, resolution):
            logger.debug("Reusing block brightness for %s at resolution %d", image.identity, resolution)
            padded = self.cache.padded
            brightness = self.cache.brightness
        else:
            logger.debug("Computing block brightness for %s at resolution %d", image.identity, resolution)
            padded = pad_image(image)
            brightness = brightness_grid(padded, resolution)
            brightness.flags.writeable = False

        table = self._table_for(characters)
        chars = table.lookup_grid(brightness, rounding)

        self.table = table
        self.cache.identity = image.identity
        self.cache.resolution = resolution
        self.cache.shape = (image.height, image.width)
        self.cache.padded = padded
        self.cache.brightness = brightness
        return CharGrid(chars=chars)

    def reset(self) -> None:
        """Forget the previous run; the next conversion starts from scratch."""
        self.cache.clear()
        self.table = None

    def _table_for(self, characters: Iterable[str]) -> CharBrightnessTable:
        target = validate_characters(characters)
        if self.table is None:
            return CharBrightnessTable(target, self.rasterizer)
        if target != self.table.characters:
            self.table.reconcile(target)
        return self.table
