"""External image tools the album delegates pixel work to."""

from .invoker import (
    EXEC_FAILURE_STATUS,
    CommandInvoker,
    MagickTool,
    PillowTool,
    ProcessHandle,
    create_tool,
)

__all__ = [
    "EXEC_FAILURE_STATUS",
    "CommandInvoker",
    "MagickTool",
    "PillowTool",
    "ProcessHandle",
    "create_tool",
]
