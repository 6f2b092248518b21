"""Run settings and their JSON file form.

A settings file holds any subset of the defaults below; missing keys fall back
to the defaults and command-line flags override the file:

    {
      "charset": "0123456789",
      "resolution": 64,
      "rounding": "nearest",
      "font": null,
      "glyph_size": 16,
      "logging": {"level": "WARNING", "file": null}
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from ascii_art.charsets import DEFAULT_CHARSET, validate_characters
from ascii_art.errors import ConfigurationError
from ascii_art.glyph_atlas import GLYPH_SIZE
from ascii_art.sampling import as_resolution
from ascii_art.table import MIN_CHARSET_SIZE, RoundingMode

DEFAULT_RESOLUTION = 2

DEFAULT_CONFIG: dict[str, Any] = {
    "charset": DEFAULT_CHARSET,
    "resolution": None,  # None: derive from terminal width
    "rounding": RoundingMode.NEAREST.value,
    "font": None,  # None: Pillow's bundled font
    "glyph_size": GLYPH_SIZE,
    "logging": {
        "level": "WARNING",
        "file": None,
    },
}

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _deep_merge(a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
    """Return deep-merged copy of dicts: values in b override a."""
    out = dict(a)
    for k, v in b.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


@dataclass(frozen=True)
class Settings:
    """Settings that affect a conversion run."""

    charset: frozenset[str] = field(default_factory=lambda: frozenset(DEFAULT_CHARSET))
    resolution: int | None = None
    rounding: RoundingMode = RoundingMode.NEAREST
    font: str | None = None
    glyph_size: int = GLYPH_SIZE
    log_level: str = "WARNING"
    log_file: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "charset", validate_characters(self.charset))
        if len(self.charset) < MIN_CHARSET_SIZE:
            raise ConfigurationError(
                f"Character set needs at least {MIN_CHARSET_SIZE} characters, got {len(self.charset)}"
            )
        try:
            object.__setattr__(self, "rounding", RoundingMode(self.rounding))
        except ValueError:
            modes = ", ".join(m.value for m in RoundingMode)
            raise ConfigurationError(f"Unknown rounding mode {self.rounding!r}; expected one of {modes}") from None
        if self.resolution is not None:
            object.__setattr__(self, "resolution", as_resolution(self.resolution))
        if not isinstance(self.glyph_size, int) or isinstance(self.glyph_size, bool) or self.glyph_size < 1:
            raise ConfigurationError(f"Glyph size must be a positive integer, got {self.glyph_size!r}")
        level = str(self.log_level).upper()
        if level not in LOG_LEVELS:
            raise ConfigurationError(f"Unknown log level {self.log_level!r}")
        object.__setattr__(self, "log_level", level)

    @property
    def level(self) -> int:
        return getattr(logging, self.log_level)

    def merged(self, **overrides: Any) -> Settings:
        """Copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        c = _deep_merge(DEFAULT_CONFIG, data or {})
        logging_section = c.get("logging") or {}
        if not isinstance(logging_section, dict):
            raise ConfigurationError(f"'logging' must be an object, got {logging_section!r}")
        return cls(
            charset=_coerce_charset(c["charset"]),
            resolution=c["resolution"],
            rounding=_coerce_str(c["rounding"], "rounding"),
            font=_coerce_optional_str(c["font"], "font"),
            glyph_size=c["glyph_size"],
            log_level=_coerce_str(logging_section.get("level", "WARNING"), "logging.level"),
            log_file=_coerce_optional_str(logging_section.get("file"), "logging.file"),
        )


def _coerce_charset(v: Any) -> frozenset[str]:
    """A string of characters or a list of one-character strings."""
    if isinstance(v, str):
        return frozenset(v)
    if isinstance(v, list) and all(isinstance(x, str) for x in v):
        return frozenset(v)
    raise ConfigurationError(f"'charset' must be a string or a list of characters, got {v!r}")


def _coerce_str(v: Any, key: str) -> str:
    if not isinstance(v, str):
        raise ConfigurationError(f"'{key}' must be a string, got {v!r}")
    return v


def _coerce_optional_str(v: Any, key: str) -> str | None:
    return None if v is None else _coerce_str(v, key)


def load_settings(path: str | Path | None = None) -> Settings:
    """Read settings from a JSON file, or return the defaults when path is None."""
    if path is None:
        return Settings.from_dict({})
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid settings file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file {path} must hold a JSON object")
    return Settings.from_dict(data)
