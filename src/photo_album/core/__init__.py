"""Core utilities and shared components for the photo album."""

from .console import TerminalConsole
from .image_utils import (
    create_image_task,
    create_image_tasks,
    derive_names,
    detect_image_format,
    parse_rotation_answer,
    prepare_output_dir,
    rotation_degrees,
    validate_paths,
)
from .logging_config import (
    get_logger,
    get_worker_logger,
    set_debug,
    setup_logger,
)
from .exceptions import (
    PhotoAlbumError,
    UsageError,
    ImageValidationError,
    ConfigurationError,
    ExternalToolError,
    PageWriteError,
    CoordinationError,
    TurnCancelled,
    PromptProtocolError,
)
from .error_handling import RunReport, with_error_handling
from .models import AlbumConfig, AlbumReport, ImageTask, RotationChoice, WorkerResult

__all__ = [
    "AlbumConfig",
    "AlbumReport",
    "ImageTask",
    "RotationChoice",
    "WorkerResult",
    "TerminalConsole",
    "create_image_task",
    "create_image_tasks",
    "derive_names",
    "detect_image_format",
    "parse_rotation_answer",
    "prepare_output_dir",
    "rotation_degrees",
    "validate_paths",
    "setup_logger",
    "get_logger",
    "get_worker_logger",
    "set_debug",
    "PhotoAlbumError",
    "UsageError",
    "ImageValidationError",
    "ConfigurationError",
    "ExternalToolError",
    "PageWriteError",
    "CoordinationError",
    "TurnCancelled",
    "PromptProtocolError",
    "RunReport",
    "with_error_handling",
]
