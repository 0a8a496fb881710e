"""A thread-safe 64-bit unsigned counter with compare-and-swap."""

from __future__ import annotations

import threading

_U64_MASK = (1 << 64) - 1


class CompareExchangeError(Exception):
    """Raised when a compare-and-swap finds a value other than the expected one."""

    def __init__(self, actual: int) -> None:
        super().__init__(f"compare-and-swap failed: current value is {actual}")
        self.actual = actual


def _check_u64(value: int, name: str) -> int:
    if not 0 <= value <= _U64_MASK:
        raise ValueError(f"{name} must fit in an unsigned 64-bit integer, got {value}")
    return value


class AtomicCounter:
    """Unsigned 64-bit counter whose operations are atomic and wrap on overflow."""

    def __init__(self, init: int = 0) -> None:
        self._value = _check_u64(init, "init")
        self._guard = threading.Lock()

    def _fetch_update(self, delta: int) -> int:
        with self._guard:
            previous = self._value
            self._value = (previous + delta) & _U64_MASK
            return previous

    def increment(self) -> int:
        """Add one and return the value from before the increment."""
        return self._fetch_update(1)

    def decrement(self) -> int:
        """Subtract one and return the value from before the decrement."""
        return self._fetch_update(-1)

    def get(self) -> int:
        """Return the current value."""
        with self._guard:
            return self._value

    def compare_and_swap(self, expected: int, new_val: int) -> int:
        """Store ``new_val`` if the value equals ``expected`` and return ``expected``.

        Raises CompareExchangeError carrying the actual value otherwise.
        """
        _check_u64(new_val, "new_val")
        with self._guard:
            if self._value != expected:
                raise CompareExchangeError(self._value)
            self._value = new_val
            return expected

    def fetch_multiply(self, multiplier: int) -> int:
        """Multiply the value atomically and return the value before multiplication."""
        _check_u64(multiplier, "multiplier")
        while True:
            current = self.get()
            try:
                return self.compare_and_swap(current, (current * multiplier) & _U64_MASK)
            except CompareExchangeError:
                continue

    def __repr__(self) -> str:
        return f"AtomicCounter({self.get()})"