"""A spin lock whose holder gets a guard that releases it on scope exit."""

from __future__ import annotations

from typing import Generic, TypeVar

from oslab.spinlock import Cell, SpinLock

T = TypeVar("T")


class SpinGuard(Generic[T]):
    """Holds a GuardedSpinLock; releases it on ``release``, scope exit or collection."""

    def __init__(self, lock: SpinLock[T], cell: Cell[T]) -> None:
        self._lock = lock
        self._cell: Cell[T] | None = cell

    def _held(self) -> Cell[T]:
        if self._cell is None:
            raise RuntimeError("spin guard has already been released")
        return self._cell

    @property
    def value(self) -> T:
        """The protected data."""
        return self._held().value

    @value.setter
    def value(self, new_value: T) -> None:
        self._held().value = new_value

    def release(self) -> None:
        """Release the lock; later calls do nothing."""
        if self._cell is not None:
            self._cell = None
            self._lock.unlock()

    def __enter__(self) -> SpinGuard[T]:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __del__(self) -> None:
        self.release()


class GuardedSpinLock(Generic[T]):
    """Spin lock that hands out a SpinGuard instead of requiring manual unlock."""

    def __init__(self, data: T) -> None:
        self._inner: SpinLock[T] = SpinLock(data)

    def lock(self) -> SpinGuard[T]:
        """Spin until the lock is taken and return a guard holding it."""
        return SpinGuard(self._inner, self._inner.lock())