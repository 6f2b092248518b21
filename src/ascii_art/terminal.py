import os
import sys


def get_terminal_size() -> tuple[int, int]:
    """Return (columns, rows) of the terminal, or (80, 24) if not a tty."""
    if not sys.stdout.isatty():
        return (80, 24)
    size = os.get_terminal_size()
    return (size.columns, size.lines)


def fit_resolution(columns: int, bounds: tuple[int, int]) -> int:
    """Largest power of two that fits in ``columns``, clamped to the inclusive bounds."""
    lo, hi = bounds
    resolution = 1 << (max(columns, 1).bit_length() - 1)
    return min(max(resolution, lo), hi)
