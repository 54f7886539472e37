"""Image file utilities: header sniffing, derived names and rotation arguments."""

import os
from typing import Iterable, List, Optional, Tuple

from .error_handling import with_error_handling
from .exceptions import ConfigurationError, ImageValidationError, UsageError
from .models import ImageTask, RotationChoice

HEADER_LENGTH = 8

# Leading bytes of the formats accepted as album input.
IMAGE_SIGNATURES: Tuple[Tuple[str, bytes], ...] = (
    ("jpeg", b"\xff\xd8"),
    ("png", b"\x89PNG\r\n\x1a\n"),
    ("bmp", b"BM"),
    ("gif", b"GIF"),
)

THUMBNAIL_PREFIX = "thumb_"
MEDIUM_PREFIX = "med_"

_ROTATION_DEGREES = {
    RotationChoice.CLOCKWISE: "90",
    RotationChoice.COUNTER_CLOCKWISE: "-90",
    RotationChoice.NONE: "0",
}


def detect_image_format(header: bytes) -> Optional[str]:
    """Return the image format whose signature starts `header`, or None."""
    for name, signature in IMAGE_SIGNATURES:
        if header.startswith(signature):
            return name
    return None


@with_error_handling
def read_header(path: str, length: int = HEADER_LENGTH) -> bytes:
    """Read the first `length` bytes of a file."""
    with open(path, "rb") as fh:
        return fh.read(length)


def validate_image_path(path: str) -> str:
    """
    Check that `path` is a readable file with a known image signature.

    Returns:
        The detected format name.

    Raises:
        ImageValidationError: naming the offending path.
    """
    if not os.path.isfile(path):
        raise ImageValidationError(path, "not a readable file")
    image_format = detect_image_format(read_header(path))
    if image_format is None:
        raise ImageValidationError(path, "not a valid image or path")
    return image_format


def validate_paths(paths: Iterable[str]) -> List[str]:
    """
    Pre-flight check of every input path before any worker is started.

    Raises:
        UsageError: if no paths were given
        ImageValidationError: for the first unreadable or non-image path
    """
    paths = list(paths)
    if not paths:
        raise UsageError("at least one image path is required")
    for path in paths:
        validate_image_path(path)
    return paths


def prepare_output_dir(output_dir: str) -> str:
    """
    Make sure the album output directory exists, creating it if needed.

    Raises:
        ConfigurationError: if the path is a file or cannot be created
    """
    try:
        os.makedirs(output_dir, exist_ok=True)
    except OSError as e:
        raise ConfigurationError(f"Cannot use output directory {output_dir}: {e}") from e
    return output_dir


def derive_names(source_path: str) -> Tuple[str, str]:
    """Thumbnail and medium file names for a source path: thumb_<base>, med_<base>."""
    base = os.path.basename(source_path)
    return f"{THUMBNAIL_PREFIX}{base}", f"{MEDIUM_PREFIX}{base}"


def create_image_task(source_path: str, index: int, output_dir: str = ".") -> ImageTask:
    """Build the immutable task for the image at 1-based position `index`."""
    thumbnail_name, medium_name = derive_names(source_path)
    return ImageTask(
        source_path=source_path,
        index=index,
        thumbnail_name=thumbnail_name,
        medium_name=medium_name,
        thumbnail_path=os.path.join(output_dir, thumbnail_name),
        medium_path=os.path.join(output_dir, medium_name),
    )


def create_image_tasks(paths: Iterable[str], output_dir: str = ".") -> List[ImageTask]:
    """Create tasks for all paths, numbered from 1 in input order."""
    return [
        create_image_task(path, index, output_dir)
        for index, path in enumerate(paths, start=1)
    ]


def parse_rotation_answer(answer: str) -> RotationChoice:
    """Map a free-text answer to a rotation: "1" clockwise, "2" counter-clockwise."""
    answer = answer.strip()
    if answer == "1":
        return RotationChoice.CLOCKWISE
    if answer == "2":
        return RotationChoice.COUNTER_CLOCKWISE
    return RotationChoice.NONE


def rotation_degrees(direction: RotationChoice) -> str:
    """Degrees argument for the external tool ("90", "-90" or "0")."""
    return _ROTATION_DEGREES.get(direction, "0")


def format_percent(percent: int) -> str:
    """Resize argument in the "<percent>%" form the external tool expects."""
    return f"{percent}%"
