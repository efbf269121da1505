"""Starting background work and waiting for a group of tasks."""

from __future__ import annotations

import threading
import time
from typing import Any, Callable


def go(func: Callable[..., Any], *args: Any) -> threading.Thread:
    """Run ``func(*args)`` on a new daemon thread and return the thread."""
    thread = threading.Thread(target=func, args=args, daemon=True)
    thread.start()
    return thread


class WaitGroup:
    """Counts outstanding tasks and lets callers wait until none remain."""

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._counter = 0

    def add(self, delta: int = 1) -> None:
        """Adjust the number of outstanding tasks by ``delta``."""
        with self._cond:
            counter = self._counter + delta
            if counter < 0:
                raise ValueError("negative wait group counter")
            self._counter = counter
            if counter == 0:
                self._cond.notify_all()

    def done(self) -> None:
        """Mark one task finished."""
        self.add(-1)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the counter reaches zero; False if ``timeout`` runs out first."""
        end = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            while self._counter > 0:
                if end is None:
                    self._cond.wait()
                    continue
                remaining = end - time.monotonic()
                if remaining <= 0:
                    return False
                self._cond.wait(remaining)
            return True