"""Admission Controller: bounds how many image workers run at once."""

import time
from typing import Callable, Optional, Protocol, Sequence

from ..core import get_logger


class Joinable(Protocol):
    """What the controller needs from a worker: a liveness probe and a join."""

    def is_alive(self) -> bool:
        ...

    def join(self, timeout: Optional[float] = None) -> None:
        ...


class AdmissionController:
    """
    Gate new workers until fewer than `max_concurrent` are alive.

    Liveness is probed with `is_alive()`, which never reaps; every worker is
    joined exactly once, in dispatch order, by `join_all`.
    """

    def __init__(
        self,
        max_concurrent: int = 3,
        poll_interval: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")
        self.max_concurrent = max_concurrent
        self.poll_interval = poll_interval
        self._sleep = sleep
        self.peak_alive = 0
        self._logger = get_logger("photo-album.admission")

    def reset(self) -> None:
        """Forget the peak observed by an earlier run."""
        self.peak_alive = 0

    @staticmethod
    def count_alive(pool: Sequence[Joinable]) -> int:
        return sum(1 for worker in pool if worker.is_alive())

    def admit(self, pool: Sequence[Joinable]) -> bool:
        """Block until there is room for one more worker, then return True."""
        while True:
            alive = self.count_alive(pool)
            if alive < self.max_concurrent:
                self.peak_alive = max(self.peak_alive, alive + 1)
                return True
            self._logger.debug(
                f"{alive} workers running (max {self.max_concurrent}), waiting"
            )
            self._sleep(self.poll_interval)

    def join_all(self, pool: Sequence[Joinable]) -> None:
        """Wait for every dispatched worker, in dispatch order."""
        for worker in pool:
            worker.join()
