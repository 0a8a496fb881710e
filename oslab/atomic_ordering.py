"""A one-shot flag channel and a set-once cell shared between threads."""

from __future__ import annotations

import threading

_U32_MAX = (1 << 32) - 1


def _check_u32(value: int) -> int:
    if not 0 <= value <= _U32_MAX:
        raise ValueError(f"value must fit in an unsigned 32-bit integer, got {value}")
    return value


class FlagChannel:
    """Passes one value from a producer to a consumer through a ready flag."""

    def __init__(self) -> None:
        self._data = 0
        self._ready = threading.Event()

    def produce(self, value: int) -> None:
        """Store the value, then raise the ready flag."""
        self._data = _check_u32(value)
        self._ready.set()

    def consume(self) -> int:
        """Wait until the ready flag is raised, then return the value."""
        self._ready.wait()
        return self._data

    def reset(self) -> None:
        """Lower the ready flag and clear the stored value."""
        self._ready.clear()
        self._data = 0


class OnceCell:
    """Holds a value that can be set exactly once."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._initialized = False
        self._value = 0

    def init(self, val: int) -> bool:
        """Store ``val`` if the cell is empty; return whether this call stored it."""
        _check_u32(val)
        with self._guard:
            if self._initialized:
                return False
            self._value = val
            self._initialized = True
            return True

    def get(self) -> int | None:
        """Return the stored value, or None if the cell was never initialized."""
        with self._guard:
            return self._value if self._initialized else None