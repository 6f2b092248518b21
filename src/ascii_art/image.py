import hashlib
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image


@dataclass(frozen=True, eq=False)
class RasterImage:
    """An RGB pixel grid plus the identity used as the pipeline cache key.

    ``pixels`` is a read-only uint8 array of shape (height, width, 3).
    """

    pixels: np.ndarray
    identity: str

    def __post_init__(self):
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 3:
            raise ValueError(f"Expected (height, width, 3) pixels, got shape {self.pixels.shape}")
        if self.pixels.shape[0] == 0 or self.pixels.shape[1] == 0:
            raise ValueError("Image must have positive dimensions")
        self.pixels.flags.writeable = False

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @classmethod
    def from_array(cls, pixels: np.ndarray, identity: str | None = None) -> "RasterImage":
        arr = np.array(pixels, dtype=np.uint8)
        if identity is None:
            identity = _content_digest(arr)
        return cls(arr, identity)


def _content_digest(pixels: np.ndarray) -> str:
    digest = hashlib.sha1()
    digest.update(str(pixels.shape).encode("ascii"))
    digest.update(np.ascontiguousarray(pixels).tobytes())
    return f"sha1:{digest.hexdigest()}"


def from_pil(image: Image.Image, identity: str | None = None) -> RasterImage:
    return RasterImage.from_array(np.asarray(image.convert("RGB")), identity)


def load_image(path: str | Path) -> RasterImage:
    """Decode an image file to RGB; the resolved path becomes its identity."""
    path = Path(path)
    with Image.open(path) as image:
        return from_pil(image, identity=str(path.resolve()))
