"""A writer-priority read-write lock with guards that release on scope exit."""

from __future__ import annotations

import threading
from typing import Generic, TypeVar

T = TypeVar("T")

READER_LIMIT = (1 << 30) - 1


class RwLock(Generic[T]):
    """Many readers or one writer; once a writer waits, new readers are held back."""

    def __init__(self, data: T) -> None:
        self._data = data
        self._cond = threading.Condition()
        self._readers = 0
        self._writer_holding = False
        self._writers_waiting = 0

    def _readable(self) -> bool:
        return (
            not self._writer_holding
            and self._writers_waiting == 0
            and self._readers < READER_LIMIT
        )

    def _writable(self) -> bool:
        return self._readers == 0 and not self._writer_holding

    def read(self) -> RwLockReadGuard[T]:
        """Block until no writer holds or waits for the lock, then take a read lock."""
        with self._cond:
            self._cond.wait_for(self._readable)
            self._readers += 1
        return RwLockReadGuard(self)

    def write(self) -> RwLockWriteGuard[T]:
        """Block until there are no readers and no writer, then take the write lock."""
        with self._cond:
            self._writers_waiting += 1
            try:
                self._cond.wait_for(self._writable)
            finally:
                self._writers_waiting -= 1
            self._writer_holding = True
        return RwLockWriteGuard(self)

    def _release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            self._cond.notify_all()

    def _release_write(self) -> None:
        with self._cond:
            self._writer_holding = False
            self._cond.notify_all()


class _Guard(Generic[T]):
    def __init__(self, lock: RwLock[T]) -> None:
        self._lock: RwLock[T] | None = lock

    def _held(self) -> RwLock[T]:
        if self._lock is None:
            raise RuntimeError("lock guard has already been released")
        return self._lock

    def _unlock(self, lock: RwLock[T]) -> None:
        raise NotImplementedError

    def release(self) -> None:
        """Release the lock; later calls do nothing."""
        lock, self._lock = self._lock, None
        if lock is not None:
            self._unlock(lock)

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __del__(self) -> None:
        self.release()


class RwLockReadGuard(_Guard[T]):
    """Shared access to the data of an RwLock."""

    def _unlock(self, lock: RwLock[T]) -> None:
        lock._release_read()

    @property
    def value(self) -> T:
        """The protected data."""
        return self._held()._data

    def release(self) -> None:
        """Release the read lock; later calls do nothing."""
        super().release()

    def __enter__(self) -> RwLockReadGuard[T]:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


class RwLockWriteGuard(_Guard[T]):
    """Exclusive access to the data of an RwLock."""

    def _unlock(self, lock: RwLock[T]) -> None:
        lock._release_write()

    @property
    def value(self) -> T:
        """The protected data."""
        return self._held()._data

    @value.setter
    def value(self, new_value: T) -> None:
        self._held()._data = new_value

    def release(self) -> None:
        """Release the write lock; later calls do nothing."""
        super().release()

    def __enter__(self) -> RwLockWriteGuard[T]:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()