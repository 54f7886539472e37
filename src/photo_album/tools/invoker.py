"""External Operation Invoker: one subordinate process per image operation."""

import subprocess
import sys
import threading
from typing import List, Optional, Sequence

from ..core import (
    ConfigurationError,
    ExternalToolError,
    RotationChoice,
    get_logger,
    rotation_degrees,
)
from ..core.image_utils import format_percent

# Status reported when the external program could not be started at all.
EXEC_FAILURE_STATUS = 127


class ProcessHandle:
    """
    Handle on a spawned external operation.

    `wait()` collects the exit status once; later calls return the cached
    status, so a handle can never be reaped twice.
    """

    def __init__(
        self,
        description: str,
        process: Optional[subprocess.Popen] = None,
        status: Optional[int] = None,
    ):
        self.description = description
        self._process = process
        self._status = status
        self._lock = threading.Lock()

    @property
    def pid(self) -> Optional[int]:
        return self._process.pid if self._process is not None else None

    @property
    def started(self) -> bool:
        return self._process is not None

    def wait(self) -> int:
        with self._lock:
            if self._status is None:
                if self._process is None:
                    raise ExternalToolError(f"{self.description} has no process to wait for")
                self._status = self._process.wait()
            return self._status

    def __repr__(self) -> str:
        return f"ProcessHandle({self.description!r}, pid={self.pid}, status={self._status})"


class CommandInvoker:
    """Spawns external commands and turns start-up failures into a status."""

    def __init__(self, stdin: Optional[int] = subprocess.DEVNULL):
        # Tools must not read the terminal; the prompt agents own it.
        self._stdin = stdin
        self._logger = get_logger("photo-album.invoker")

    def invoke(self, argv: Sequence[str], description: str) -> ProcessHandle:
        self._logger.debug(f"Starting {description}: {' '.join(argv)}")
        try:
            process = subprocess.Popen(list(argv), stdin=self._stdin)
        except OSError as e:
            self._logger.error(
                f"Failed to start external tool for {description}: {e}"
            )
            return ProcessHandle(description, status=EXEC_FAILURE_STATUS)
        return ProcessHandle(description, process=process)


class MagickTool:
    """ImageMagick-backed image tool (`magick convert` / `magick display`)."""

    def __init__(self, binary: str = "magick", invoker: Optional[CommandInvoker] = None):
        self.binary = binary
        self.invoker = invoker or CommandInvoker()

    def resize_argv(self, source: str, target: str, percent: int) -> List[str]:
        return [self.binary, "convert", "-resize", format_percent(percent), source, target]

    def rotate_argv(self, source: str, target: str, direction: RotationChoice) -> List[str]:
        return [self.binary, "convert", "-rotate", rotation_degrees(direction), source, target]

    def preview_argv(self, path: str) -> List[str]:
        return [self.binary, "display", path]

    def resize(self, source: str, target: str, percent: int) -> ProcessHandle:
        return self.invoker.invoke(
            self.resize_argv(source, target, percent), f"resize {source} by {percent}%"
        )

    def rotate(self, source: str, target: str, direction: RotationChoice) -> ProcessHandle:
        return self.invoker.invoke(
            self.rotate_argv(source, target, direction),
            f"rotate {source} {direction.value}",
        )

    def preview(self, path: str) -> ProcessHandle:
        return self.invoker.invoke(self.preview_argv(path), f"preview {path}")


class PillowTool(MagickTool):
    """
    Same three operations run through `python -m photo_album.tools.pillow_cli`.

    Used on hosts without ImageMagick. The preview returns once the image has
    been handed to the platform viewer, not when the window is closed.
    """

    def __init__(self, python: str = sys.executable, invoker: Optional[CommandInvoker] = None):
        super().__init__(binary=python, invoker=invoker)

    def _base(self) -> List[str]:
        return [self.binary, "-m", "photo_album.tools.pillow_cli"]

    def resize_argv(self, source: str, target: str, percent: int) -> List[str]:
        return self._base() + ["resize", source, target, format_percent(percent)]

    def rotate_argv(self, source: str, target: str, direction: RotationChoice) -> List[str]:
        return self._base() + ["rotate", source, target, rotation_degrees(direction)]

    def preview_argv(self, path: str) -> List[str]:
        return self._base() + ["display", path]


def create_tool(name: str, magick_binary: str = "magick") -> MagickTool:
    """Build the image tool selected by `AlbumConfig.tool`."""
    if name == "magick":
        return MagickTool(binary=magick_binary)
    if name == "pillow":
        return PillowTool()
    raise ConfigurationError(f"Unknown image tool: {name}")
