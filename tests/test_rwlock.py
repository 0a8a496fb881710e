import threading
import time

import pytest

from oslab.rwlock import RwLock


def test_multiple_readers():
    lock = RwLock(0)
    seen = []

    def reader():
        with lock.read() as g:
            seen.append(g.value)

    threads = [threading.Thread(target=reader) for _ in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert seen == [0] * 10
    with lock.read() as g:
        assert g.value == 0


def test_readers_hold_lock_concurrently():
    lock = RwLock(0)
    barrier = threading.Barrier(5, timeout=5)
    outcomes = []

    def reader():
        with lock.read():
            try:
                barrier.wait()
                outcomes.append(True)
            except threading.BrokenBarrierError:
                outcomes.append(False)

    threads = [threading.Thread(target=reader) for _ in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert outcomes == [True] * 5
    with lock.write() as g:
        assert g.value == 0


def test_writer_excludes_readers():
    lock = RwLock(0)

    def writer():
        with lock.write() as g:
            g.value = 42

    t = threading.Thread(target=writer)
    t.start()
    t.join()
    with lock.read() as g:
        assert g.value == 42


def test_concurrent_reads_after_write():
    lock = RwLock([])
    with lock.write() as g:
        g.value.append(1)
        g.value.append(2)
    seen = []

    def reader():
        with lock.read() as g:
            seen.append(list(g.value))

    threads = [threading.Thread(target=reader) for _ in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert seen == [[1, 2]] * 5
    with lock.read() as g:
        assert g.value == [1, 2]


def test_concurrent_writes_serialized():
    lock = RwLock(0)

    def worker():
        for _ in range(100):
            with lock.write() as g:
                g.value += 1

    threads = [threading.Thread(target=worker) for _ in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    with lock.read() as g:
        assert g.value == 1000


def test_waiting_writer_blocks_new_readers():
    lock = RwLock(0)
    order = []
    first = lock.read()
    assert first.value == 0

    def writer():
        with lock.write() as g:
            g.value = 1
            order.append("write")

    def reader():
        with lock.read() as g:
            order.append(("read", g.value))

    w = threading.Thread(target=writer)
    w.start()
    time.sleep(0.1)
    r = threading.Thread(target=reader)
    r.start()
    time.sleep(0.1)
    assert order == []
    first.release()
    w.join(5)
    r.join(5)
    assert order == ["write", ("read", 1)]
    with lock.read() as g:
        assert g.value == 1


def test_released_guard_rejects_access():
    lock = RwLock(5)
    guard = lock.read()
    guard.release()
    with pytest.raises(RuntimeError):
        _ = guard.value
    guard.release()
    with lock.write() as g:
        assert g.value == 5


def test_read_guard_is_read_only():
    lock = RwLock(3)
    with lock.read() as g:
        with pytest.raises(AttributeError):
            g.value = 4
    with lock.read() as g:
        assert g.value == 3


def test_write_guard_released_on_exception():
    lock = RwLock(0)
    with pytest.raises(ValueError):
        with lock.write() as g:
            g.value = 9
            raise ValueError("boom")
    with lock.read() as g:
        assert g.value == 9