import threading

import pytest

from oslab.atomic_ordering import FlagChannel, OnceCell


def test_flag_channel():
    ch = FlagChannel()
    producer = threading.Timer(0.05, ch.produce, args=(42,))
    producer.start()
    val = ch.consume()
    producer.join()
    assert val == 42


def test_flag_channel_large_value():
    ch = FlagChannel()
    producer = threading.Thread(target=ch.produce, args=(0xDEAD_BEEF,))
    producer.start()
    val = ch.consume()
    producer.join()
    assert val == 0xDEAD_BEEF


def test_flag_channel_reset_allows_reuse():
    ch = FlagChannel()
    ch.produce(1)
    assert ch.consume() == 1
    ch.reset()
    ch.produce(7)
    assert ch.consume() == 7


def test_flag_channel_rejects_out_of_range():
    with pytest.raises(ValueError):
        FlagChannel().produce(1 << 32)


def test_once_cell_init_once():
    cell = OnceCell()
    assert cell.init(42)
    assert not cell.init(100)
    assert cell.get() == 42


def test_once_cell_not_initialized():
    assert OnceCell().get() is None


def test_once_cell_concurrent():
    cell = OnceCell()
    results = []
    lock = threading.Lock()

    def work(i):
        ok = cell.init(i)
        with lock:
            results.append((i, ok))

    threads = [threading.Thread(target=work, args=(i,)) for i in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    winners = [i for i, ok in results if ok]
    assert len(winners) == 1
    assert cell.get() == winners[0]