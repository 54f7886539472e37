"""Custom exceptions for the photo album."""

from __future__ import annotations


class PhotoAlbumError(Exception):
    """Base exception for all photo album errors."""


class UsageError(PhotoAlbumError):
    """Error raised when the command line is missing required input."""


class ImageValidationError(PhotoAlbumError):
    """Error raised when an input path is unreadable or not an image."""

    def __init__(self, path: str, reason: str = "not a valid image or path") -> None:
        super().__init__(f"{reason}: {path}")
        self.path = path


class ConfigurationError(PhotoAlbumError):
    """Error raised for invalid configuration options."""


class ExternalToolError(PhotoAlbumError):
    """Error raised when the external image tool cannot be used."""


class PageWriteError(PhotoAlbumError):
    """Error raised when a gallery fragment cannot be written to the page."""


class CoordinationError(PhotoAlbumError):
    """Error raised when workers break the turn-taking protocol."""


class TurnCancelled(CoordinationError):
    """Raised in a worker whose turn will never come because a predecessor failed."""

    def __init__(self, index: int, reason: str) -> None:
        super().__init__(f"turn {index} cancelled: {reason}")
        self.index = index
        self.reason = reason


class PromptProtocolError(CoordinationError):
    """Raised when prompt requests arrive in the wrong order."""
