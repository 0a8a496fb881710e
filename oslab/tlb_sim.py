"""A FIFO translation lookaside buffer and an MMU that fills it from a page table."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class TlbEntry:
    """One TLB slot; an empty slot is invalid."""

    valid: bool = False
    asid: int = 0
    vpn: int = 0
    ppn: int = 0
    flags: int = 0

    def matches(self, vpn: int, asid: int) -> bool:
        return self.valid and self.vpn == vpn and self.asid == asid


@dataclass
class TlbStats:
    """Hit and miss counters of a TLB."""

    hits: int = 0
    misses: int = 0

    def hit_rate(self) -> float:
        """Fraction of lookups that hit; 0.0 before any lookup."""
        total = self.hits + self.misses
        return self.hits / total if total else 0.0


class Tlb:
    """Fixed-size TLB that replaces entries in first-in, first-out order."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError(f"capacity must not be negative, got {capacity}")
        self.capacity = capacity
        self._entries = [TlbEntry() for _ in range(capacity)]
        self._fifo_ptr = 0
        self.stats = TlbStats()

    def _find(self, vpn: int, asid: int) -> TlbEntry | None:
        return next((e for e in self._entries if e.matches(vpn, asid)), None)

    def lookup(self, vpn: int, asid: int) -> int | None:
        """Return the cached ppn for ``(vpn, asid)`` or None, counting hit or miss."""
        entry = self._find(vpn, asid)
        if entry is None:
            self.stats.misses += 1
            return None
        self.stats.hits += 1
        return entry.ppn

    def insert(self, vpn: int, ppn: int, asid: int, flags: int) -> None:
        """Cache a mapping, updating an existing one or replacing the oldest slot."""
        existing = self._find(vpn, asid)
        if existing is not None:
            existing.ppn = ppn
            existing.flags = flags
            return
        if not self._entries:
            raise ValueError("cannot insert into a TLB with no slots")
        self._entries[self._fifo_ptr] = TlbEntry(True, asid, vpn, ppn, flags)
        self._fifo_ptr = (self._fifo_ptr + 1) % self.capacity

    def _invalidate(self, predicate) -> None:
        for entry in self._entries:
            if predicate(entry):
                entry.valid = False

    def flush_all(self) -> None:
        """Invalidate every entry."""
        self._invalidate(lambda e: True)

    def flush_by_vpn(self, vpn: int) -> None:
        """Invalidate every entry for ``vpn`` in any address space."""
        self._invalidate(lambda e: e.vpn == vpn)

    def flush_by_asid(self, asid: int) -> None:
        """Invalidate every entry of address space ``asid``."""
        self._invalidate(lambda e: e.asid == asid)

    def valid_count(self) -> int:
        """Number of valid entries."""
        return sum(1 for e in self._entries if e.valid)


@dataclass(frozen=True)
class PageMapping:
    vpn: int
    ppn: int
    flags: int


class Mmu:
    """Translates through the TLB first and falls back to its page table on a miss."""

    def __init__(self, tlb_capacity: int) -> None:
        self.tlb = Tlb(tlb_capacity)
        self._page_table: list[tuple[int, PageMapping]] = []
        self.current_asid = 0

    def add_mapping(self, asid: int, vpn: int, ppn: int, flags: int) -> None:
        """Add a mapping to the page table of address space ``asid``."""
        self._page_table.append((asid, PageMapping(vpn, ppn, flags)))

    def switch_asid(self, new_asid: int) -> None:
        """Make ``new_asid`` the current address space."""
        self.current_asid = new_asid

    def translate(self, vpn: int) -> int | None:
        """Return the ppn for ``vpn`` in the current address space, or None on a page fault."""
        asid = self.current_asid
        ppn = self.tlb.lookup(vpn, asid)
        if ppn is not None:
            return ppn
        mapping = next(
            (m for a, m in self._page_table if a == asid and m.vpn == vpn), None
        )
        if mapping is None:
            return None
        self.tlb.insert(vpn, mapping.ppn, asid, mapping.flags)
        return mapping.ppn