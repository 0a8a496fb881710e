"""Hand-written awaitables: a countdown and a single yield."""

from __future__ import annotations

from collections.abc import Generator


class CountDown:
    """Yields once per remaining count, then resolves to ``"liftoff!"``."""

    def __init__(self, count: int) -> None:
        self.count = count

    def __await__(self) -> Generator[None, None, str]:
        while self.count > 0:
            self.count -= 1
            yield
        return "liftoff!"


class YieldOnce:
    """Yields to the event loop on its first poll and resolves on the second."""

    def __init__(self) -> None:
        self.yielded = False

    def __await__(self) -> Generator[None, None, None]:
        if not self.yielded:
            self.yielded = True
            yield