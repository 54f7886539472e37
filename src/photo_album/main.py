"""Main module for the photo album CLI."""

import sys
import argparse
from typing import List, Optional

from pydantic import ValidationError

from . import __version__
from .core import (
    AlbumConfig,
    ConfigurationError,
    ImageValidationError,
    PhotoAlbumError,
    UsageError,
    get_logger,
    prepare_output_dir,
    set_debug,
    validate_paths,
)
from .workers import AlbumBuilder

EXIT_OK = 0
EXIT_WORKER_FAILED = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    """
    Builds the command-line parser.

    One positional list of image paths plus options mirroring `AlbumConfig`.
    """
    parser = argparse.ArgumentParser(
        prog="photo-album",
        description="Build a captioned HTML photo album from image files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Build index.html from three photos, at most 3 images in flight
  photo-album beach.jpg dog.png sunset.gif

  # One image at a time, Pillow instead of ImageMagick
  photo-album --max-concurrent 1 --tool pillow *.jpg
        """,
    )
    parser.add_argument("images", nargs="*", help="Image files (JPEG, PNG, BMP or GIF)")
    parser.add_argument(
        "--max-concurrent",
        type=int,
        default=3,
        help="Maximum number of images processed at once (default: 3)",
    )
    parser.add_argument(
        "--thumbnail-percent", type=int, default=10, help="Thumbnail size in percent (default: 10)"
    )
    parser.add_argument(
        "--medium-percent", type=int, default=25, help="Medium image size in percent (default: 25)"
    )
    parser.add_argument("--output-dir", default=".", help="Directory for the page and images")
    parser.add_argument("--page-name", default="index.html", help="Album page file name")
    parser.add_argument(
        "--tool",
        choices=["magick", "pillow"],
        default="magick",
        help="External image tool (default: magick)",
    )
    parser.add_argument("--debug", action="store_true", help="Trace every worker step")
    parser.add_argument("--version", action="store_true", help="Show version information")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """
    Entry point for the photo album CLI.

    Validates every input path before any worker starts, builds the album and
    exits with 0 on success, 1 when some image could not be added, 2 on
    usage or validation errors.
    """
    parser = build_parser()
    args: argparse.Namespace = parser.parse_args(argv)

    if args.version:
        print("Photo Album CLI")
        print(f"Version {__version__}")
        sys.exit(EXIT_OK)

    logger = get_logger("photo-album.cli")

    try:
        config = AlbumConfig(
            max_concurrent=args.max_concurrent,
            thumbnail_percent=args.thumbnail_percent,
            medium_percent=args.medium_percent,
            output_dir=args.output_dir,
            page_name=args.page_name,
            tool=args.tool,
            debug=args.debug,
        )
        set_debug(config.debug)
        paths = validate_paths(args.images)
        prepare_output_dir(config.output_dir)
    except UsageError as e:
        logger.error(f"Usage: photo-album [img]+ ({e})")
        sys.exit(EXIT_USAGE)
    except ImageValidationError as e:
        logger.error(f"Error: one (or more) img is not a valid image or path: {e.path}")
        sys.exit(EXIT_USAGE)
    except (ValidationError, ConfigurationError) as e:
        logger.error(f"Invalid options: {e}")
        sys.exit(EXIT_USAGE)

    try:
        report = AlbumBuilder(config).build(paths)
    except KeyboardInterrupt:
        logger.warning("Album interrupted by user.")
        sys.exit(EXIT_INTERRUPTED)
    except PhotoAlbumError as e:
        logger.error(f"Album failed: {e}", exc_info=True)
        sys.exit(EXIT_WORKER_FAILED)

    sys.exit(EXIT_OK if report.succeeded else EXIT_WORKER_FAILED)


if __name__ == "__main__":
    main()
