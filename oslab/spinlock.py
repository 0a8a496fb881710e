"""A busy-waiting lock with explicit lock and unlock calls."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass
class Cell(Generic[T]):
    """Mutable box handed out by a lock so the holder can replace the data."""

    value: T


class SpinLock(Generic[T]):
    """Protects a value with a flag that waiters spin on until it is cleared."""

    def __init__(self, data: T) -> None:
        self._flag = threading.Lock()
        self._cell: Cell[T] = Cell(data)

    def _try_acquire(self) -> bool:
        return self._flag.acquire(blocking=False)

    def lock(self) -> Cell[T]:
        """Spin until the lock is taken and return the protected cell.

        The caller must call ``unlock`` when done with the data.
        """
        while not self._try_acquire():
            time.sleep(0)
        return self._cell

    def unlock(self) -> None:
        """Release the lock; releasing a free lock does nothing."""
        try:
            self._flag.release()
        except RuntimeError:
            pass

    def try_lock(self) -> Cell[T] | None:
        """Take the lock if it is free and return the cell, else return None."""
        return self._cell if self._try_acquire() else None

    @property
    def locked(self) -> bool:
        """Whether the lock is currently held."""
        return self._flag.locked()

    def __repr__(self) -> str:
        state: Any = "locked" if self.locked else "unlocked"
        return f"SpinLock(<{state}>)"