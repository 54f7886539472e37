"""Protocol definitions for dependency injection and testability."""

from typing import Protocol

from .models import RotationChoice


class OperationHandle(Protocol):
    """Handle on one running external operation."""

    def wait(self) -> int:
        """Block until the operation finishes and return its exit status."""
        ...


class ImageToolProtocol(Protocol):
    """Protocol for the external image tool."""

    def resize(self, source: str, target: str, percent: int) -> OperationHandle:
        """Start resizing `source` by `percent` into `target`."""
        ...

    def rotate(
        self, source: str, target: str, direction: RotationChoice
    ) -> OperationHandle:
        """Start a quarter turn of `source` into `target`."""
        ...

    def preview(self, path: str) -> OperationHandle:
        """Show `path` on screen; the handle completes when the viewer closes."""
        ...


class ConsoleProtocol(Protocol):
    """Protocol for the interactive terminal."""

    def ask(self, message: str) -> str:
        """Show `message` and return one line of user input without its newline."""
        ...

    def show(self, message: str) -> None:
        """Print a line for the user."""
        ...
