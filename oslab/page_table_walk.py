"""A single-level page table translating 32-bit virtual addresses."""

from __future__ import annotations

from dataclasses import dataclass

PAGE_SIZE = 4096
PAGE_OFFSET_BITS = 12

PTE_VALID = 1 << 0
PTE_READ = 1 << 1
PTE_WRITE = 1 << 2

_OFFSET_MASK = (1 << PAGE_OFFSET_BITS) - 1
_U32_MAX = (1 << 32) - 1


class PageFault(Exception):
    """The virtual page is not mapped, or its entry is not valid."""

    def __init__(self, va: int) -> None:
        super().__init__(f"page fault at virtual address {va:#x}")
        self.va = va


class PermissionDenied(Exception):
    """A write was attempted on a page that is not writable."""

    def __init__(self, va: int) -> None:
        super().__init__(f"write to read-only page at virtual address {va:#x}")
        self.va = va


@dataclass(frozen=True)
class PageTableEntry:
    ppn: int
    flags: int


def _check_va(va: int) -> int:
    if not 0 <= va <= _U32_MAX:
        raise ValueError(f"virtual address must fit in 32 bits, got {va:#x}")
    return va


def va_to_vpn(va: int) -> int:
    """Return the virtual page number (the bits above the page offset)."""
    return _check_va(va) >> PAGE_OFFSET_BITS


def va_to_offset(va: int) -> int:
    """Return the offset within the page (the low 12 bits)."""
    return _check_va(va) & _OFFSET_MASK


def make_pa(ppn: int, offset: int) -> int:
    """Combine a physical page number and an offset into a physical address."""
    pa = ppn * PAGE_SIZE + offset
    if not 0 <= pa <= _U32_MAX:
        raise OverflowError(f"physical address {pa:#x} does not fit in 32 bits")
    return pa


class SingleLevelPageTable:
    """Maps up to ``max_pages`` virtual pages to physical pages."""

    def __init__(self, max_pages: int) -> None:
        self._entries: list[PageTableEntry | None] = [None] * max_pages

    def __len__(self) -> int:
        return len(self._entries)

    def _check_vpn(self, vpn: int) -> int:
        if not 0 <= vpn < len(self._entries):
            raise IndexError(f"virtual page {vpn} is outside the table of {len(self)} pages")
        return vpn

    def map(self, vpn: int, ppn: int, flags: int) -> None:
        """Map virtual page ``vpn`` to physical page ``ppn`` with ``flags``."""
        self._entries[self._check_vpn(vpn)] = PageTableEntry(ppn, flags)

    def unmap(self, vpn: int) -> None:
        """Remove the mapping of virtual page ``vpn``."""
        self._entries[self._check_vpn(vpn)] = None

    def lookup(self, vpn: int) -> PageTableEntry | None:
        """Return the entry for ``vpn``, or None if it is unmapped or out of range."""
        if 0 <= vpn < len(self._entries):
            return self._entries[vpn]
        return None

    def translate(self, va: int, is_write: bool = False) -> int:
        """Translate ``va`` to a physical address.

        Raises PageFault for an unmapped or invalid page and PermissionDenied
        for a write to a page without the write flag.
        """
        entry = self.lookup(va_to_vpn(va))
        if entry is None or not entry.flags & PTE_VALID:
            raise PageFault(va)
        if is_write and not entry.flags & PTE_WRITE:
            raise PermissionDenied(va)
        return make_pa(entry.ppn, va_to_offset(va))