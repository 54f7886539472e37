"""Testing utilities and fakes for the photo album."""

from .fakes import (
    FakeHandle,
    FakeImageTool,
    Invocation,
    ScriptedConsole,
    create_test_image,
    write_test_image,
)

__all__ = [
    "FakeHandle",
    "FakeImageTool",
    "Invocation",
    "ScriptedConsole",
    "create_test_image",
    "write_test_image",
]
