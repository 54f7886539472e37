"""Turn-taking between image workers: the ordering token ring and the preview sequencer.

Both are chains of single-slot queues addressed by sequence index. Worker
``i`` blocks on slot ``i`` and the worker before it hands over by putting
into that slot, so the right worker is woken directly and no token ever has
to be re-posted. Index 1 never waits.

A failed worker poisons the slot of its successor; each successor forwards
the poison and raises ``TurnCancelled``, so no worker is left blocked on a
turn that can no longer come.
"""

import queue
import threading
from typing import Dict, List, Optional, Set

from ..core import CoordinationError, TurnCancelled, get_logger


class _Cancelled:
    """Poison token carried down the chain after a fatal failure."""

    def __init__(self, origin: int, reason: str):
        self.origin = origin
        self.reason = reason


class OrderedHandoff:
    """A chain of turns served exactly once each, in index order."""

    def __init__(self, count: int, name: str = "handoff"):
        if count < 1:
            raise ValueError("count must be at least 1")
        self.count = count
        self.name = name
        # slot i holds the token that lets worker i proceed; slot count+1 is the tail
        self._slots: Dict[int, "queue.Queue[object]"] = {
            i: queue.Queue(maxsize=1) for i in range(2, count + 2)
        }
        self._lock = threading.Lock()
        self._released: Set[int] = set()
        self._granted: List[int] = []
        self._last_token = 1
        self._cancelled: Optional[_Cancelled] = None
        self._logger = get_logger(f"photo-album.{name}")

    @property
    def granted(self) -> List[int]:
        """Indexes in the order their turn was granted."""
        with self._lock:
            return list(self._granted)

    @property
    def last_token(self) -> int:
        """Highest token handed out so far; count + 1 once every worker is done."""
        with self._lock:
            return self._last_token

    @property
    def cancelled(self) -> bool:
        with self._lock:
            return self._cancelled is not None

    def _check_index(self, index: int) -> None:
        if not 1 <= index <= self.count:
            raise CoordinationError(
                f"{self.name}: index {index} outside 1..{self.count}"
            )

    def wait_turn(self, index: int, timeout: Optional[float] = None) -> None:
        """
        Block until it is `index`'s turn.

        Raises:
            TurnCancelled: if a predecessor failed; the cancellation has
                already been forwarded to `index + 1`.
            CoordinationError: on timeout or a token for the wrong index.
        """
        self._check_index(index)
        if index > 1:
            self._logger.debug(f"{index} waiting for its {self.name} turn")
            try:
                token = self._slots[index].get(timeout=timeout)
            except queue.Empty:
                raise CoordinationError(
                    f"{self.name}: timed out waiting for turn {index}"
                ) from None

            if isinstance(token, _Cancelled):
                self._logger.debug(
                    f"{index} received cancellation from {token.origin}, forwarding"
                )
                self.cancel(index, token.reason, origin=token.origin)
                raise TurnCancelled(index, token.reason)
            if token != index:
                raise CoordinationError(
                    f"{self.name}: worker {index} received token {token}"
                )
            self._logger.debug(f"{index} received token {token}")

        with self._lock:
            self._granted.append(index)

    def release(self, index: int) -> None:
        """Hand the turn to `index + 1`. Each index may release only once."""
        self._check_index(index)
        with self._lock:
            if index in self._released:
                raise CoordinationError(
                    f"{self.name}: turn {index} was already handed over"
                )
            self._released.add(index)
            self._last_token = index + 1
        self._logger.debug(f"{index} sending {index + 1}")
        self._slots[index + 1].put_nowait(index + 1)

    def cancel(self, index: int, reason: str, origin: Optional[int] = None) -> None:
        """
        Poison the chain after `index`. No-op if `index` already handed over.
        """
        self._check_index(index)
        token = _Cancelled(origin if origin is not None else index, reason)
        with self._lock:
            if index in self._released:
                return
            self._released.add(index)
            if self._cancelled is None:
                self._cancelled = token
        self._logger.warning(
            f"{self.name} cancelled after {index}: {reason}"
        )
        self._slots[index + 1].put_nowait(token)


class TokenRing(OrderedHandoff):
    """Grants write permission on the album page in input order."""

    def __init__(self, count: int):
        super().__init__(count, name="ring")

    def pass_turn(self, index: int) -> None:
        """Give the next image permission to append."""
        self.release(index)


class PreviewSequencer(OrderedHandoff):
    """Lets image `i` preview only after image `i - 1` finished its prompts."""

    def __init__(self, count: int):
        super().__init__(count, name="preview")

    def done(self, index: int) -> None:
        """Signal that `index`'s preview and prompt phase is complete."""
        self.release(index)
