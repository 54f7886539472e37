"""Single writer that owns the album page and appends fragments in order."""

import html
import queue
import threading
from concurrent.futures import Future
from typing import IO, Optional, Tuple

from ..core import PageWriteError, get_logger, with_error_handling

ENTRY = "entry"
CAPTION = "caption"

_Request = Tuple[int, str, str, "Future[None]"]


def render_entry(thumbnail_name: str, medium_name: str) -> str:
    """Thumbnail linked to its medium-size image."""
    return '<a href="{}"><img src="{}"></a>'.format(
        html.escape(medium_name, quote=True), html.escape(thumbnail_name, quote=True)
    )


def render_caption(caption: str) -> str:
    return f"<h2>{html.escape(caption)}</h2>"


class PageWriter:
    """
    Append-only writer for the album page, running in its own thread.

    Workers submit fragments and wait on the returned future. The writer
    accepts fragments only in album order (entry 1, caption 1, entry 2, ...)
    and fails anything out of turn. The file is truncated by the first
    fragment written, not when the writer starts.
    """

    def __init__(self, page_path: str):
        self.page_path = page_path
        self.fragments_written = 0
        self._requests: "queue.Queue[Optional[_Request]]" = queue.Queue()
        self._thread = threading.Thread(
            target=self._run, name="page-writer", daemon=True
        )
        self._file: Optional[IO[str]] = None
        self._expected: Tuple[int, str] = (1, ENTRY)
        self._closed = False
        self._lock = threading.Lock()
        self._logger = get_logger("photo-album.page")

    def start(self) -> "PageWriter":
        self._thread.start()
        return self

    def __enter__(self) -> "PageWriter":
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def append_entry(self, index: int, thumbnail_name: str, medium_name: str) -> "Future[None]":
        return self._submit(index, ENTRY, render_entry(thumbnail_name, medium_name))

    def append_caption(self, index: int, caption: str) -> "Future[None]":
        return self._submit(index, CAPTION, render_caption(caption))

    def _submit(self, index: int, part: str, fragment: str) -> "Future[None]":
        future: "Future[None]" = Future()
        with self._lock:
            if self._closed:
                raise PageWriteError("page writer is closed")
            self._requests.put((index, part, fragment, future))
        return future

    def _run(self) -> None:
        while True:
            request = self._requests.get()
            if request is None:
                break
            index, part, fragment, future = request
            if not future.set_running_or_notify_cancel():
                continue
            try:
                self._check_order(index, part)
                self._write_fragment(fragment)
            except Exception as e:  # noqa: BLE001 - handed back to the submitting worker
                future.set_exception(e)
            else:
                self._advance(index, part)
                future.set_result(None)

    def _check_order(self, index: int, part: str) -> None:
        if (index, part) != self._expected:
            expected_index, expected_part = self._expected
            raise PageWriteError(
                f"out-of-turn {part} for image {index}; "
                f"page expects {expected_part} for image {expected_index}"
            )

    def _advance(self, index: int, part: str) -> None:
        self._expected = (index, CAPTION) if part == ENTRY else (index + 1, ENTRY)

    @with_error_handling
    def _write_fragment(self, fragment: str) -> None:
        if self._file is None:
            self._logger.debug(f"Creating {self.page_path}")
            self._file = open(self.page_path, "w", encoding="utf-8")
        self._file.write(fragment)
        self._file.flush()
        self.fragments_written += 1

    def close(self) -> None:
        """Finish pending writes, close the page and stop the writer thread."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._requests.put(None)
        if self._thread.is_alive():
            self._thread.join()
        if self._file is not None:
            self._file.close()
            self._file = None
