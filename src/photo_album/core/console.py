"""Terminal input/output shared by the prompt agents."""

import sys
import threading
from typing import Optional, TextIO


class TerminalConsole:
    """
    Line-oriented console on top of the process's standard streams.

    Writes are serialized with a lock so banners and questions from
    different workers never interleave mid-line.
    """

    def __init__(
        self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None
    ):
        self._stdin = stdin
        self._stdout = stdout
        self._lock = threading.Lock()

    @property
    def stdin(self) -> TextIO:
        return self._stdin if self._stdin is not None else sys.stdin

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    def show(self, message: str) -> None:
        with self._lock:
            self.stdout.write(message + "\n")
            self.stdout.flush()

    def ask(self, message: str) -> str:
        """
        Prompt with `message` and read one line.

        Raises:
            EOFError: when the input stream is exhausted.
        """
        with self._lock:
            self.stdout.write(f"{message}: ")
            self.stdout.flush()
            line = self.stdin.readline()
        if not line:
            raise EOFError("no more input on the terminal")
        if line.endswith("\n"):
            line = line[:-1]
        return line
