"""Building and decoding RISC-V SV39 page table entries."""

from __future__ import annotations

PTE_V = 1 << 0  # valid
PTE_R = 1 << 1  # readable
PTE_W = 1 << 2  # writable
PTE_X = 1 << 3  # executable
PTE_U = 1 << 4  # user accessible
PTE_G = 1 << 5  # global
PTE_A = 1 << 6  # accessed
PTE_D = 1 << 7  # dirty

PPN_SHIFT = 10
PPN_MASK = (1 << 44) - 1
FLAGS_MASK = 0xFF
_U64_MASK = (1 << 64) - 1


def make_pte(ppn: int, flags: int) -> int:
    """Place ``ppn`` in bits 53..10 and OR in ``flags``."""
    return ((ppn << PPN_SHIFT) | flags) & _U64_MASK


def extract_ppn(pte: int) -> int:
    """Return the 44-bit physical page number of ``pte``."""
    return (pte >> PPN_SHIFT) & PPN_MASK


def extract_flags(pte: int) -> int:
    """Return the low eight flag bits of ``pte``."""
    return pte & FLAGS_MASK


def is_valid(pte: int) -> bool:
    """Whether the V bit is set."""
    return bool(pte & PTE_V)


def is_leaf(pte: int) -> bool:
    """Whether any of R, W or X is set, making the entry point at a page."""
    return bool(pte & (PTE_R | PTE_W | PTE_X))


def check_permission(pte: int, read: bool, write: bool, execute: bool) -> bool:
    """Whether ``pte`` is valid and grants every requested access."""
    if not is_valid(pte):
        return False
    requested = (
        (read, PTE_R),
        (write, PTE_W),
        (execute, PTE_X),
    )
    return all(pte & bit for wanted, bit in requested if wanted)