"""Pillow-based stand-in for the ImageMagick commands the album runs.

Usage:
    python -m photo_album.tools.pillow_cli resize <source> <target> <percent>%
    python -m photo_album.tools.pillow_cli rotate <source> <target> <90|-90|0>
    python -m photo_album.tools.pillow_cli display <source>
"""

import argparse
import sys
from typing import List, Optional

from PIL import Image, UnidentifiedImageError

from ..core import get_logger


def parse_percent(value: str) -> float:
    """Parse "25%" (or "25") into a scale factor of 0.25."""
    number = float(value.rstrip("%"))
    if number <= 0:
        raise argparse.ArgumentTypeError(f"percent must be positive: {value}")
    return number / 100.0


def resize_image(source: str, target: str, scale: float) -> None:
    with Image.open(source) as image:
        width = max(1, round(image.width * scale))
        height = max(1, round(image.height * scale))
        resized = image.resize((width, height))
        resized.save(target, format=image.format)


def rotate_image(source: str, target: str, degrees: int) -> None:
    """Rotate clockwise by `degrees`, as `magick convert -rotate` does."""
    with Image.open(source) as image:
        image_format = image.format
        # Pillow turns counter-clockwise for positive angles.
        rotated = image.rotate(-degrees, expand=True)
    rotated.save(target, format=image_format)


def display_image(source: str) -> None:
    with Image.open(source) as image:
        image.show(title=source)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="photo-album-pillow", description="Pillow image operations for photo-album"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    resize = subparsers.add_parser("resize", help="Scale an image by a percentage")
    resize.add_argument("source")
    resize.add_argument("target")
    resize.add_argument("percent", type=parse_percent)

    rotate = subparsers.add_parser("rotate", help="Rotate an image by a quarter turn")
    rotate.add_argument("source")
    rotate.add_argument("target")
    rotate.add_argument("degrees", type=int, choices=[90, -90, 0])

    display = subparsers.add_parser("display", help="Open an image in the viewer")
    display.add_argument("source")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    logger = get_logger("photo-album.pillow")
    args = build_parser().parse_args(argv)

    try:
        if args.command == "resize":
            resize_image(args.source, args.target, args.percent)
        elif args.command == "rotate":
            rotate_image(args.source, args.target, args.degrees)
        else:
            display_image(args.source)
    except (OSError, UnidentifiedImageError, ValueError) as e:
        logger.error(f"{args.command} failed for {args.source}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
