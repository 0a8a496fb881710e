"""A simulated RISC-V SV39 three-level page table with 4 KiB and 2 MiB mappings."""

from __future__ import annotations

from dataclasses import dataclass, field

PAGE_SIZE = 4096
PT_ENTRIES = 512

PTE_V = 1 << 0
PTE_R = 1 << 1
PTE_W = 1 << 2
PTE_X = 1 << 3

PPN_SHIFT = 10
PAGE_OFFSET_BITS = 12
VPN_BITS = 9
LEVELS = 3
SUPERPAGE_SIZE = PAGE_SIZE * PT_ENTRIES

_VPN_MASK = PT_ENTRIES - 1
_LEAF_BITS = PTE_R | PTE_W | PTE_X
_PPN_MASK = (1 << 44) - 1

__all__ = [
    "PAGE_SIZE",
    "PT_ENTRIES",
    "PTE_V",
    "PTE_R",
    "PTE_W",
    "PTE_X",
    "PageFault",
    "PageTableNode",
    "Sv39PageTable",
]


class PageFault(Exception):
    """Raised when a virtual address has no valid mapping."""

    def __init__(self, va: int) -> None:
        super().__init__(f"page fault at virtual address {va:#x}")
        self.va = va


@dataclass
class PageTableNode:
    """One page of a page table: 512 entries, all zero when fresh."""

    entries: list[int] = field(default_factory=lambda: [0] * PT_ENTRIES)


def _is_valid(pte: int) -> bool:
    return bool(pte & PTE_V)


def _is_leaf(pte: int) -> bool:
    return bool(pte & _LEAF_BITS)


def _pte_ppn(pte: int) -> int:
    return (pte >> PPN_SHIFT) & _PPN_MASK


class Sv39PageTable:
    """Three-level page table whose table pages live in a simulated physical memory."""

    def __init__(self) -> None:
        self.root_ppn = 0x80000
        self._next_ppn = self.root_ppn + 1
        self._nodes: dict[int, PageTableNode] = {self.root_ppn: PageTableNode()}

    def _alloc_node(self) -> int:
        ppn = self._next_ppn
        self._next_ppn += 1
        self._nodes[ppn] = PageTableNode()
        return ppn

    @staticmethod
    def extract_vpn(va: int, level: int) -> int:
        """Return the 9-bit VPN index of ``va`` for ``level`` (2, 1 or 0)."""
        if not 0 <= level < LEVELS:
            raise ValueError(f"level must be 0, 1 or 2, got {level}")
        return (va >> (PAGE_OFFSET_BITS + level * VPN_BITS)) & _VPN_MASK

    def _descend_to(self, va: int, leaf_level: int) -> PageTableNode:
        """Walk from the root, creating missing tables, down to ``leaf_level``'s node."""
        node = self._nodes[self.root_ppn]
        for level in range(LEVELS - 1, leaf_level, -1):
            index = self.extract_vpn(va, level)
            pte = node.entries[index]
            if not _is_valid(pte):
                child = self._alloc_node()
                node.entries[index] = (child << PPN_SHIFT) | PTE_V
            elif _is_leaf(pte):
                raise ValueError(
                    f"virtual address {va:#x} is already covered by a larger mapping "
                    f"at level {level}"
                )
            else:
                child = _pte_ppn(pte)
            node = self._nodes[child]
        return node

    def map_page(self, va: int, pa: int, flags: int) -> None:
        """Map the 4 KiB page holding ``va`` to the page holding ``pa`` with ``flags``."""
        node = self._descend_to(va, 0)
        node.entries[self.extract_vpn(va, 0)] = ((pa >> PAGE_OFFSET_BITS) << PPN_SHIFT) | flags

    def map_superpage(self, va: int, pa: int, flags: int) -> None:
        """Map a 2 MiB superpage with a leaf entry at level 1.

        Both addresses must be 2 MiB aligned; ValueError is raised otherwise.
        """
        if va % SUPERPAGE_SIZE:
            raise ValueError("va must be 2MB-aligned")
        if pa % SUPERPAGE_SIZE:
            raise ValueError("pa must be 2MB-aligned")
        node = self._descend_to(va, 1)
        node.entries[self.extract_vpn(va, 1)] = ((pa >> PAGE_OFFSET_BITS) << PPN_SHIFT) | flags

    def translate(self, va: int) -> int:
        """Walk the table and return the physical address for ``va``.

        Raises PageFault when an entry on the way is invalid or level 0 is not a leaf.
        """
        node_ppn = self.root_ppn
        for level in range(LEVELS - 1, -1, -1):
            node = self._nodes.get(node_ppn)
            if node is None:
                raise PageFault(va)
            pte = node.entries[self.extract_vpn(va, level)]
            if not _is_valid(pte):
                raise PageFault(va)
            if _is_leaf(pte):
                offset_bits = PAGE_OFFSET_BITS + level * VPN_BITS
                offset = va & ((1 << offset_bits) - 1)
                return (_pte_ppn(pte) << PAGE_OFFSET_BITS) + offset
            node_ppn = _pte_ppn(pte)
        raise PageFault(va)