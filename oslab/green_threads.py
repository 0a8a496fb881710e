"""A cooperative round-robin scheduler of green threads that yield explicitly."""

from __future__ import annotations

import enum
import threading
from dataclasses import dataclass, field
from typing import Callable


class ThreadState(enum.Enum):
    READY = "ready"
    RUNNING = "running"
    FINISHED = "finished"


@dataclass
class _GreenThread:
    state: ThreadState
    entry: Callable[[], object] | None = None
    turn: threading.Semaphore = field(default_factory=lambda: threading.Semaphore(0))
    started: bool = False


_active: Scheduler | None = None
_active_guard = threading.Lock()


class Scheduler:
    """Runs spawned entries one at a time, switching only when a thread yields or ends."""

    def __init__(self) -> None:
        self._threads: list[_GreenThread] = [_GreenThread(ThreadState.RUNNING, started=True)]
        self._current = 0
        self._errors: list[BaseException] = []

    def spawn(self, entry: Callable[[], object]) -> None:
        """Register ``entry`` to run when the thread is first scheduled."""
        self._threads.append(_GreenThread(ThreadState.READY, entry))

    def run(self) -> None:
        """Schedule threads until every spawned thread has finished.

        An exception raised by an entry is re-raised here once all threads are done.
        """
        global _active
        with _active_guard:
            if _active is not None:
                raise RuntimeError("another scheduler is already running")
            _active = self
        try:
            while not all(t.state is ThreadState.FINISHED for t in self._threads[1:]):
                self._schedule_next()
        finally:
            with _active_guard:
                _active = None
        if self._errors:
            raise self._errors[0]

    def _schedule_next(self) -> None:
        count = len(self._threads)
        candidates = ((self._current + step) % count for step in range(1, count + 1))
        nxt = next(
            (i for i in candidates if self._threads[i].state is ThreadState.READY), None
        )
        if nxt is None:
            return
        prev = self._threads[self._current]
        if prev.state is not ThreadState.FINISHED:
            prev.state = ThreadState.READY
        target = self._threads[nxt]
        target.state = ThreadState.RUNNING
        self._current = nxt
        if target.started:
            target.turn.release()
        else:
            target.started = True
            threading.Thread(target=self._wrapper, args=(target,), daemon=True).start()
        if prev.state is not ThreadState.FINISHED:
            prev.turn.acquire()

    def _wrapper(self, thread: _GreenThread) -> None:
        entry, thread.entry = thread.entry, None
        try:
            if entry is not None:
                entry()
        except BaseException as exc:  # handed back to run()
            self._errors.append(exc)
        finally:
            self._thread_finished()

    def _thread_finished(self) -> None:
        self._threads[self._current].state = ThreadState.FINISHED
        self._schedule_next()


def yield_now() -> None:
    """Give up the processor to the next ready green thread; no-op outside a scheduler."""
    scheduler = _active
    if scheduler is not None:
        scheduler._schedule_next()