import argparse
import logging
import sys
from pathlib import Path

from ascii_art.charsets import expand_chars
from ascii_art.config import LOG_LEVELS, load_settings
from ascii_art.errors import AsciiArtError
from ascii_art.glyph_atlas import GlyphRasterizer
from ascii_art.image import load_image
from ascii_art.logging_conf import setup_logging
from ascii_art.padding import padded_size
from ascii_art.pipeline import ConversionPipeline
from ascii_art.sampling import resolution_bounds
from ascii_art.table import RoundingMode
from ascii_art.terminal import fit_resolution, get_terminal_size

logger = logging.getLogger(__name__)


def _fail(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Render an image as ASCII art")
    parser.add_argument("image", help="Path to input image")
    parser.add_argument(
        "-r",
        "--resolution",
        type=int,
        default=None,
        help="Characters per row, a power of two (default: fit the terminal width)",
    )
    parser.add_argument(
        "-c",
        "--chars",
        nargs="+",
        default=None,
        help="Characters to draw with: single characters, ranges like a-z, 'space' or 'all' (default: 0-9)",
    )
    parser.add_argument(
        "--round",
        dest="rounding",
        choices=[m.value for m in RoundingMode],
        default=None,
        help="How block brightness is matched to glyphs (default: nearest)",
    )
    parser.add_argument("--font", default=None, help="TrueType font used to measure glyphs (default: Pillow's own)")
    parser.add_argument("--glyph-size", type=int, default=None, help="Side of the glyph bitmap in pixels (default: 16)")
    parser.add_argument("--config", default=None, help="JSON settings file; flags override its values")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default=None, help="Logging level (default: WARNING)")
    parser.add_argument("--log-file", default=None, help="Also write logs to this rotating file")
    args = parser.parse_args(argv)

    image_path = Path(args.image)
    if not image_path.exists():
        _fail(f"File not found: {image_path}")

    try:
        settings = load_settings(args.config)
        charset = frozenset().union(*(expand_chars(a) for a in args.chars)) if args.chars else None
        settings = settings.merged(
            charset=charset,
            resolution=args.resolution,
            rounding=args.rounding,
            font=args.font,
            glyph_size=args.glyph_size,
            log_level=args.log_level,
            log_file=args.log_file,
        )
    except (AsciiArtError, OSError) as e:
        _fail(str(e))

    setup_logging(settings.level, settings.log_file)

    try:
        image = load_image(image_path)
    except OSError as e:
        _fail(f"Cannot read image {image_path}: {e}")

    resolution = settings.resolution
    if resolution is None:
        bounds = resolution_bounds(*padded_size(image.width, image.height))
        resolution = fit_resolution(get_terminal_size()[0], bounds)
    logger.info(
        "Converting %s (%dx%d) at resolution %d with %d characters, rounding %s",
        image_path,
        image.width,
        image.height,
        resolution,
        len(settings.charset),
        settings.rounding.value,
    )

    try:
        rasterizer = GlyphRasterizer(settings.font, settings.glyph_size)
        pipeline = ConversionPipeline(rasterizer, settings.rounding)
        grid = pipeline.convert(image, settings.charset, resolution)
    except (AsciiArtError, OSError) as e:
        _fail(str(e))

    print(grid)


if __name__ == "__main__":
    main()
