# src/photo_album/core/error_handling.py

import functools
import logging
from typing import Any, Callable, Dict, List, TypeVar

from .exceptions import ImageValidationError, PageWriteError, PhotoAlbumError

F = TypeVar("F", bound=Callable[..., Any])


def with_error_handling(func: F) -> F:
    """
    A decorator to wrap functions with standardized error handling.

    OSErrors raised while touching the page become PageWriteError and
    OSErrors raised while probing input files become ImageValidationError.
    Album errors pass through untouched; everything else is logged and
    re-raised as is.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = logging.getLogger("photo-album." + func.__name__)
        try:
            return func(*args, **kwargs)
        except PhotoAlbumError:
            raise
        except OSError as e:
            logger.error(f"I/O error in '{func.__name__}': {e}", exc_info=True)
            if func.__name__.startswith("_write"):
                raise PageWriteError(f"Failed to write page in {func.__name__}: {e}") from e
            if func.__name__ == "read_header":
                path = getattr(e, "filename", None) or (args[0] if args else "unknown")
                raise ImageValidationError(str(path), "unreadable path") from e
            raise
        except Exception as e:
            logger.error(f"Error in '{func.__name__}': {e}", exc_info=True)
            raise
    return wrapper  # type: ignore[return-value]


class RunReport:
    """
    Context manager for an album run to collect and summarize worker failures.
    """
    def __init__(self, operation_name: str = "Album Run"):
        self.operation_name = operation_name
        self.errors: List[Dict[str, str]] = []
        self.logger = logging.getLogger("photo-album." + self.__class__.__name__)

    def __enter__(self):
        self.logger.info(f"Starting {self.operation_name}.")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.errors:
            self.logger.warning(
                f"{self.operation_name} completed with {len(self.errors)} error(s)."
            )
            for i, error_detail in enumerate(self.errors):
                item_identifier = error_detail.get("item", "Unknown item")
                error_message = error_detail.get("error", "Unknown error")
                self.logger.error(
                    f"  Error {i+1}/{len(self.errors)} for image '{item_identifier}': {error_message}"
                )
        elif exc_type:
            self.logger.error(
                f"{self.operation_name} failed due to an unhandled exception: {exc_val}",
                exc_info=(exc_type, exc_val, exc_tb),
            )
        else:
            self.logger.info(f"{self.operation_name} completed successfully.")

        return False

    def add_error(self, error_message: str, item_identifier: str = "Unknown item"):
        """
        Report a failure for one image within the 'with' block.

        Args:
            error_message (str): The error message or exception string.
            item_identifier (str): The image that failed (path or index).
        """
        self.errors.append({"item": item_identifier, "error": str(error_message)})
        self.logger.debug(f"Error added for image '{item_identifier}' in {self.operation_name}: {error_message}")
