"""Glyph brightness table.

Each character carries a raw density (fraction of inked cells in its bitmap)
and a brightness normalized so the active set spans exactly [0, 1]. Adding or
removing a character only renormalizes the whole set when the density range
actually moves.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from enum import Enum

import numpy as np

from ascii_art.charsets import is_supported, validate_characters
from ascii_art.engine import Rasterizer
from ascii_art.errors import ConfigurationError, InvalidCharacterError
from ascii_art.glyph_atlas import GlyphRasterizer, glyph_density

logger = logging.getLogger(__name__)

MIN_CHARSET_SIZE = 2


class RoundingMode(str, Enum):
    NEAREST = "nearest"
    CEILING = "ceiling"
    FLOOR = "floor"

    def select(self, normalized: Mapping[str, float], brightness: float) -> str:
        return _SELECTORS[self](normalized, brightness)


def _closest(entries: Iterable[tuple[str, float]], brightness: float) -> str | None:
    """Entry closest to brightness; equal distances go to the lowest character code."""
    best_char = None
    best_key = None
    for char, value in entries:
        key = (abs(value - brightness), ord(char))
        if best_key is None or key < best_key:
            best_key = key
            best_char = char
    return best_char


def _select_nearest(normalized: Mapping[str, float], brightness: float) -> str:
    return _closest(normalized.items(), brightness)


def _select_ceiling(normalized: Mapping[str, float], brightness: float) -> str:
    above = ((c, v) for c, v in normalized.items() if v >= brightness)
    return _closest(above, brightness) or _select_nearest(normalized, brightness)


def _select_floor(normalized: Mapping[str, float], brightness: float) -> str:
    below = ((c, v) for c, v in normalized.items() if v <= brightness)
    return _closest(below, brightness) or _select_nearest(normalized, brightness)


_SELECTORS = {
    RoundingMode.NEAREST: _select_nearest,
    RoundingMode.CEILING: _select_ceiling,
    RoundingMode.FLOOR: _select_floor,
}


def _check_viable(raw: Mapping[str, float]) -> None:
    if len(raw) < MIN_CHARSET_SIZE:
        raise ConfigurationError(
            f"Character set needs at least {MIN_CHARSET_SIZE} characters, got {len(raw)}"
        )
    if min(raw.values()) == max(raw.values()):
        chars = "".join(sorted(raw))
        raise ConfigurationError(f"Characters {chars!r} all have the same density; nothing to tell apart")


class CharBrightnessTable:
    def __init__(self, characters: Iterable[str], rasterizer: Rasterizer | None = None):
        self._rasterizer = rasterizer if rasterizer is not None else GlyphRasterizer()
        self._densities: dict[str, float] = {}
        raw = {c: self._measure(c) for c in sorted(validate_characters(characters))}
        _check_viable(raw)
        self._raw = raw
        self._normalized: dict[str, float] = {}
        self._min = 0.0
        self._max = 0.0
        self.rescans = 0
        self._rescan()

    def __len__(self) -> int:
        return len(self._raw)

    def __contains__(self, char: object) -> bool:
        return char in self._raw

    @property
    def characters(self) -> frozenset[str]:
        return frozenset(self._raw)

    @property
    def densities(self) -> dict[str, float]:
        return dict(self._raw)

    @property
    def normalized(self) -> dict[str, float]:
        return dict(self._normalized)

    @property
    def density_range(self) -> tuple[float, float]:
        return self._min, self._max

    def lookup(self, brightness: float, rounding: RoundingMode | str = RoundingMode.NEAREST) -> str:
        """Character whose normalized brightness best matches ``brightness`` in [0, 1]."""
        if len(self._raw) < MIN_CHARSET_SIZE:
            raise ConfigurationError(f"Character set needs at least {MIN_CHARSET_SIZE} characters")
        return RoundingMode(rounding).select(self._normalized, brightness)

    def lookup_grid(self, brightness: np.ndarray, rounding: RoundingMode | str = RoundingMode.NEAREST) -> list[str]:
        """Map a (rows, cols) brightness array to one string per row."""
        rounding = RoundingMode(rounding)
        memo: dict[float, str] = {}
        lines = []
        for row in np.asarray(brightness, dtype=np.float64):
            chars = []
            for value in row.tolist():
                if value not in memo:
                    memo[value] = self.lookup(value, rounding)
                chars.append(memo[value])
            lines.append("".join(chars))
        return lines

    def add(self, char: str) -> None:
        if not is_supported(char):
            raise InvalidCharacterError(char)
        if char in self._raw:
            return
        self._insert(char, self._measure(char))

    def remove(self, char: str) -> None:
        if not is_supported(char):
            raise InvalidCharacterError(char)
        if char not in self._raw:
            return
        _check_viable({c: v for c, v in self._raw.items() if c != char})
        self._delete(char)

    def reconcile(self, characters: Iterable[str]) -> tuple[frozenset[str], frozenset[str]]:
        """Bring the table in line with a new character set.

        The target set is validated before anything changes. Additions are
        applied before removals so the table never shrinks below the target
        size along the way. Returns the (added, removed) characters.
        """
        target = validate_characters(characters)
        current = self.characters
        added = target - current
        removed = current - target
        if not added and not removed:
            return added, removed

        measured = {c: self._measure(c) for c in sorted(added)}
        final = {c: v for c, v in self._raw.items() if c in target}
        final.update(measured)
        _check_viable(final)

        for char, raw in measured.items():
            self._insert(char, raw)
        for char in sorted(removed):
            self._delete(char)
        logger.debug("Reconciled charset: +%d -%d, now %d characters", len(added), len(removed), len(self._raw))
        return added, removed

    def _measure(self, char: str) -> float:
        if char not in self._densities:
            self._densities[char] = glyph_density(self._rasterizer(char))
        return self._densities[char]

    def _insert(self, char: str, raw: float) -> None:
        self._raw[char] = raw
        if self._min <= raw <= self._max:
            self._normalized[char] = (raw - self._min) / (self._max - self._min)
        else:
            self._rescan()

    def _delete(self, char: str) -> None:
        raw = self._raw.pop(char)
        del self._normalized[char]
        if raw == self._min or raw == self._max:
            self._rescan()

    def _rescan(self) -> None:
        """Renormalize every entry against the current density range."""
        self._min = min(self._raw.values())
        self._max = max(self._raw.values())
        span = self._max - self._min
        self._normalized = {c: (raw - self._min) / span for c, raw in self._raw.items()}
        self.rescans += 1
        logger.debug("Renormalized %d glyphs over density range [%.4f, %.4f]", len(self._raw), self._min, self._max)
