"""Cell states for the interactive Sudoku board."""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional


# Bits 1..9 set, bit 0 unused.
FULL_MASK = 0b1111111110


class CellKind(IntEnum):
    """The state tag of a single board position."""
    EMPTY = 0
    FIXED = 1
    CONFLICTING = 2
    CANDIDATES = 3
    COLLAPSED = 4


@dataclass(frozen=True)
class Cell:
    """
    One grid position.
    
    `data` holds the digit for Fixed/Conflicting/Collapsed cells and the
    candidate bitmask for Candidates cells. It is 0 for Empty cells.
    """
    kind: CellKind = CellKind.EMPTY
    data: int = 0
    
    @classmethod
    def empty(cls) -> Cell:
        return cls(CellKind.EMPTY, 0)
    
    @classmethod
    def fixed(cls, value: int) -> Cell:
        return cls(CellKind.FIXED, _check_digit(value))
    
    @classmethod
    def conflicting(cls, value: int) -> Cell:
        return cls(CellKind.CONFLICTING, _check_digit(value))
    
    @classmethod
    def candidates(cls, mask: int = FULL_MASK) -> Cell:
        return cls(CellKind.CANDIDATES, mask & FULL_MASK)
    
    @classmethod
    def collapsed(cls, value: int) -> Cell:
        return cls(CellKind.COLLAPSED, _check_digit(value))
    
    @property
    def is_empty(self) -> bool:
        return self.kind == CellKind.EMPTY
    
    @property
    def is_candidates(self) -> bool:
        return self.kind == CellKind.CANDIDATES
    
    @property
    def is_concrete(self) -> bool:
        """True for cells holding a digit (user-entered or solver-chosen)."""
        return self.kind in (CellKind.FIXED, CellKind.CONFLICTING, CellKind.COLLAPSED)
    
    @property
    def value(self) -> Optional[int]:
        """The digit held by a concrete cell, else None."""
        return self.data if self.is_concrete else None
    
    @property
    def mask(self) -> int:
        if not self.is_candidates:
            raise ValueError(f"{self.kind.name} cell has no candidate mask")
        return self.data
    
    @property
    def entropy(self) -> int:
        """Number of values still possible for a Candidates cell."""
        return bin(self.mask).count("1")
    
    def has_candidate(self, value: int) -> bool:
        return self.is_candidates and bool(self.data & (1 << value))
    
    def candidate_values(self) -> List[int]:
        """Remaining candidate digits in ascending order."""
        mask = self.mask
        return [v for v in range(1, 10) if mask & (1 << v)]
    
    def without_candidate(self, value: int) -> Cell:
        """Drop `value` from the mask. Non-candidate cells are returned unchanged."""
        if not self.is_candidates:
            return self
        return Cell(CellKind.CANDIDATES, self.data & ~(1 << value) & FULL_MASK)
    
    def __str__(self) -> str:
        if self.is_concrete:
            return str(self.data)
        if self.is_candidates:
            return "{" + "".join(str(v) for v in self.candidate_values()) + "}"
        return " "


def _check_digit(value: int) -> int:
    value = int(value)
    if value < 1 or value > 9:
        raise ValueError(f"Value must be 1-9, got {value}")
    return value
