from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import numpy as np


@dataclass
class CharGrid:
    chars: list[str]  # one string per row

    @property
    def rows(self) -> int:
        return len(self.chars)

    @property
    def cols(self) -> int:
        return len(self.chars[0]) if self.chars else 0

    def __str__(self) -> str:
        return "\n".join(self.chars)


class Rasterizer(Protocol):
    def __call__(self, char: str) -> np.ndarray:
        """Render a character to a fixed-size square boolean grid (True = ink)."""
        ...
