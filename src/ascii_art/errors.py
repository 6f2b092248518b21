class AsciiArtError(ValueError):
    """Base class for errors raised by the conversion core."""


class ConfigurationError(AsciiArtError):
    """Resolution or character set cannot be used for a conversion."""


class InvalidCharacterError(AsciiArtError):
    """A character outside the rasterizable range was referenced."""

    def __init__(self, char: str, reason: str = "outside printable ASCII (32-126)"):
        self.char = char
        super().__init__(f"Unsupported character {char!r}: {reason}")
