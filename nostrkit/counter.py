"""A striped counter that spreads concurrent increments across cells."""

from __future__ import annotations

import os
import threading


class LongAdder:
    """A counter split into cells chosen by thread, summed on demand."""

    def __init__(self, cells: int | None = None) -> None:
        if cells is None:
            cells = os.cpu_count() or 1
        cells = max(1, cells)
        self._counts = [0] * cells
        self._locks = [threading.Lock() for _ in range(cells)]

    @property
    def cells(self) -> int:
        return len(self._counts)

    def increment(self) -> None:
        """Add one to the cell belonging to the calling thread."""
        index = threading.get_ident() % len(self._counts)
        with self._locks[index]:
            self._counts[index] += 1

    def sum(self) -> int:
        """Total of all cells."""
        total = 0
        for index, lock in enumerate(self._locks):
            with lock:
                total += self._counts[index]
        return total

    def reset(self) -> None:
        """Set every cell back to zero."""
        for index, lock in enumerate(self._locks):
            with lock:
                self._counts[index] = 0