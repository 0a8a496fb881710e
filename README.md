# oslab

Small, self-contained Python models of the mechanisms an operating system
is built from. You can import each module, run it and step through it.
Together they cover synchronisation primitives, cooperative scheduling,
async patterns and virtual-memory translation. The package has no
dependencies outside the standard library.

## Modules

| Module | What it models |
| --- | --- |
| `oslab.atomic_counter` | `AtomicCounter`: an unsigned 64-bit counter with `increment`, `decrement`, `get`, `compare_and_swap` (raises `CompareExchangeError` carrying the actual value on mismatch) and a CAS-loop `fetch_multiply` |
| `oslab.atomic_ordering` | `FlagChannel` (`produce` a value, then `consume` waits for the ready flag; `reset`) and a set-once `OnceCell` (`init`, `get`) |
| `oslab.spinlock` | `SpinLock` with explicit `lock` / `unlock` / `try_lock`, handing out a mutable `Cell` |
| `oslab.spinlock_guard` | `GuardedSpinLock` whose `lock()` returns a `SpinGuard` that releases on `release()`, on `with` exit or on collection |
| `oslab.rwlock` | Writer-priority `RwLock` whose `read()` and `write()` return `RwLockReadGuard` / `RwLockWriteGuard` |
| `oslab.green_threads` | Round-robin cooperative `Scheduler` (`spawn`, `run`) with `yield_now()` and `ThreadState` |
| `oslab.basic_future` | Hand-written awaitables `CountDown` (resolves to `"liftoff!"`) and `YieldOnce` |
| `oslab.async_tasks` | `concurrent_squares` and `parallel_sleep_tasks` |
| `oslab.async_channel` | `producer_consumer` and `fan_in` over a bounded `asyncio.Queue` |
| `oslab.select_timeout` | `with_timeout` and `race` |
| `oslab.pte_flags` | RISC-V SV39 page-table-entry encoding (`make_pte`, `extract_ppn`, `extract_flags`) and checks (`is_valid`, `is_leaf`, `check_permission`) |
| `oslab.page_table_walk` | `SingleLevelPageTable` with 4 KiB pages; `translate` raises `PageFault` or `PermissionDenied` |
| `oslab.multi_level_pt` | Three-level `Sv39PageTable` with `map_page`, 2 MiB `map_superpage` and `translate` (raises `PageFault`) |
| `oslab.tlb_sim` | FIFO `Tlb` with ASID-aware flushes and hit statistics, and an `Mmu` that falls back to a page table |

## Installing

```
pip install .
```

## Examples

A spin lock guard releases its lock when the `with` block ends:

```python
from oslab.spinlock_guard import GuardedSpinLock

lock = GuardedSpinLock([])
with lock.lock() as guard:
    guard.value.append(1)
```

Green threads take turns each time one of them yields:

```python
from oslab.green_threads import Scheduler, yield_now

order = []

def task(name):
    def run():
        order.append(f"{name}1")
        yield_now()
        order.append(f"{name}2")
    return run

sched = Scheduler()
sched.spawn(task("a"))
sched.spawn(task("b"))
sched.run()
print(order)  # ['a1', 'b1', 'a2', 'b2']
```

Translating addresses through an SV39 page table:

```python
from oslab.multi_level_pt import PTE_R, PTE_V, Sv39PageTable

pt = Sv39PageTable()
pt.map_page(0x2000, 0x9000_0000, PTE_V | PTE_R)
assert pt.translate(0x2ABC) == 0x9000_0ABC
```

An unmapped address raises `oslab.multi_level_pt.PageFault`.

A TLB in front of a page table:

```python
from oslab.tlb_sim import Mmu

mmu = Mmu(4)
mmu.add_mapping(1, 0x100, 0x200, 0x7)
mmu.switch_asid(1)
mmu.translate(0x100)   # miss, then look in the page table
mmu.translate(0x100)   # hit
print(mmu.tlb.stats.hit_rate())  # 0.5
```

Racing coroutines with asyncio:

```python
import asyncio
from oslab.select_timeout import race, with_timeout

async def main():
    print(await with_timeout(asyncio.sleep(1, "late"), 50))   # None
    print(await race(asyncio.sleep(0.01, "fast"), asyncio.sleep(0.2, "slow")))

asyncio.run(main())
```

## What it does not do

- There is no command-line program; everything is used by importing it.
- The green-thread `Scheduler` does not switch register contexts or manage
  stacks by hand. Each green thread runs on its own operating-system thread,
  and the scheduler lets only one of them run at a time. Control passes only
  when a thread calls `yield_now()` or returns.
- The page tables and the TLB are simulations kept in Python objects. They
  translate numbers and do not touch real memory.

## Running the tests

```
pip install ".[test]"
pytest
```