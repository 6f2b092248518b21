import numpy as np
from PIL import Image, ImageDraw, ImageFont

from ascii_art.charsets import is_supported
from ascii_art.errors import InvalidCharacterError

GLYPH_SIZE = 16
INK_THRESHOLD = 128


def _load_font(font_path: str | None, size: int) -> ImageFont.FreeTypeFont:
    if font_path is None:
        return ImageFont.load_default(size)
    return ImageFont.truetype(font_path, size)


class GlyphRasterizer:
    """Renders printable ASCII characters to square boolean bitmaps.

    Bitmaps and densities are cached per character; rendering is deterministic
    for a given font and size.
    """

    def __init__(self, font_path: str | None = None, size: int = GLYPH_SIZE):
        self.font_path = font_path
        self.size = size
        self._font = _load_font(font_path, size)
        # Align every glyph on the same baseline, measured from a reference capital
        self._y_offset = -self._font.getbbox("M")[1]
        self._bitmaps: dict[str, np.ndarray] = {}

    def bitmap(self, char: str) -> np.ndarray:
        if not is_supported(char):
            raise InvalidCharacterError(char)
        if char not in self._bitmaps:
            img = Image.new("L", (self.size, self.size), 0)
            draw = ImageDraw.Draw(img)
            draw.text((0, self._y_offset), char, fill=255, font=self._font)
            mask = np.asarray(img) >= INK_THRESHOLD
            mask.flags.writeable = False
            self._bitmaps[char] = mask
        return self._bitmaps[char]

    def density(self, char: str) -> float:
        """Fraction of inked cells in the character's bitmap."""
        return glyph_density(self.bitmap(char))

    def __call__(self, char: str) -> np.ndarray:
        return self.bitmap(char)


def glyph_density(bitmap: np.ndarray) -> float:
    return float(np.count_nonzero(bitmap)) / bitmap.size
