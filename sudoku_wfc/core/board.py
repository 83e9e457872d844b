"""9x9 Sudoku board with constraint checking and candidate propagation."""

from __future__ import annotations
from typing import Iterator, List, Optional, Set, Tuple, Union
import numpy as np

from .cell import Cell, CellKind, FULL_MASK


SIZE = 9
BOX_SIZE = 3
NUM_CELLS = SIZE * SIZE

Position = Tuple[int, int]
Index = Union[int, Position]


def _build_groups() -> List[np.ndarray]:
    """Linear indices of the 27 groups: 9 rows, then 9 columns, then 9 boxes."""
    grid = np.arange(NUM_CELLS).reshape(SIZE, SIZE)
    groups = [grid[r, :].copy() for r in range(SIZE)]
    groups += [grid[:, c].copy() for c in range(SIZE)]
    for b in range(SIZE):
        r0, c0 = (b // BOX_SIZE) * BOX_SIZE, (b % BOX_SIZE) * BOX_SIZE
        groups.append(grid[r0:r0 + BOX_SIZE, c0:c0 + BOX_SIZE].flatten())
    return groups


GROUPS = _build_groups()


def _build_peers() -> List[np.ndarray]:
    peers = []
    for idx in range(NUM_CELLS):
        row, col = divmod(idx, SIZE)
        box = (row // BOX_SIZE) * BOX_SIZE + col // BOX_SIZE
        members = set(GROUPS[row]) | set(GROUPS[SIZE + col]) | set(GROUPS[2 * SIZE + box])
        members.discard(idx)
        peers.append(np.array(sorted(members), dtype=np.intp))
    return peers


PEERS = _build_peers()

_CONCRETE = (CellKind.FIXED, CellKind.CONFLICTING, CellKind.COLLAPSED)


class Board:
    """
    A fixed 9x9 grid of cells, addressed row-major by (row, col).
    
    Cell states live in two parallel flat numpy arrays: `kinds` holds the
    CellKind tag and `data` holds the digit or candidate mask. Copying a
    board copies both arrays, so snapshots never share state.
    """
    
    def __init__(self):
        self.kinds = np.zeros(NUM_CELLS, dtype=np.int8)
        self.data = np.zeros(NUM_CELLS, dtype=np.int16)
    
    def copy(self) -> Board:
        """Create an independent snapshot of the board."""
        new_board = Board()
        new_board.kinds = self.kinds.copy()
        new_board.data = self.data.copy()
        return new_board
    
    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------
    
    def __getitem__(self, pos: Index) -> Cell:
        idx = _to_index(pos)
        return Cell(CellKind(int(self.kinds[idx])), int(self.data[idx]))
    
    def __setitem__(self, pos: Index, cell: Cell) -> None:
        idx = _to_index(pos)
        self.kinds[idx] = int(cell.kind)
        self.data[idx] = cell.data
    
    def cells(self) -> Iterator[Tuple[Position, Cell]]:
        """Iterate over ((row, col), cell) in row-major order."""
        for idx in range(NUM_CELLS):
            yield divmod(idx, SIZE), self[idx]
    
    def get_row(self, row: int) -> List[Cell]:
        return [self[i] for i in GROUPS[row]]
    
    def get_col(self, col: int) -> List[Cell]:
        return [self[i] for i in GROUPS[SIZE + col]]
    
    def get_box(self, row: int, col: int) -> List[Cell]:
        """Get the cells of the box containing (row, col)."""
        box = (row // BOX_SIZE) * BOX_SIZE + col // BOX_SIZE
        return [self[i] for i in GROUPS[2 * SIZE + box]]
    
    def get_peers(self, row: int, col: int) -> Set[Position]:
        """Positions sharing a row, column, or box with (row, col), excluding itself."""
        return {divmod(int(i), SIZE) for i in PEERS[_to_index((row, col))]}
    
    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------
    
    def set_cell(self, pos: Index, value: Optional[int]) -> None:
        """
        Store a user value at `pos` (None clears it), then recompute which
        user cells are conflicting across the whole board.
        """
        self[pos] = Cell.empty() if value is None else Cell.fixed(value)
        self.recompute_conflicts()
    
    def can_solve(self) -> bool:
        """True iff no cell is Conflicting."""
        return not np.any(self.kinds == CellKind.CONFLICTING)
    
    def clear_solver_state(self) -> None:
        """Turn every Candidates/Collapsed cell back into Empty."""
        solver_cells = (self.kinds == CellKind.CANDIDATES) | (self.kinds == CellKind.COLLAPSED)
        self.kinds[solver_cells] = CellKind.EMPTY
        self.data[solver_cells] = 0
    
    def clear_all(self) -> None:
        self.kinds[:] = CellKind.EMPTY
        self.data[:] = 0
    
    def recompute_conflicts(self) -> None:
        """
        Re-derive Fixed/Conflicting for user cells.
        
        Every user cell is first reset to Fixed. Then any row, column or box
        holding a digit more than once gets all of its user cells marked
        Conflicting, not only the duplicates. Collapsed cells count as
        values but keep their state.
        """
        self.kinds[self.kinds == CellKind.CONFLICTING] = CellKind.FIXED
        
        concrete = np.isin(self.kinds, _CONCRETE)
        for group in GROUPS:
            values = self.data[group][concrete[group]]
            if len(values) and np.bincount(values, minlength=SIZE + 1).max() >= 2:
                fixed = group[self.kinds[group] == CellKind.FIXED]
                self.kinds[fixed] = CellKind.CONFLICTING
    
    # ------------------------------------------------------------------
    # Solver support
    # ------------------------------------------------------------------
    
    def seed_candidates(self) -> None:
        """
        Replace every Empty cell with the mask of digits not already used by
        a concrete cell in its row, column, or box.
        """
        concrete = np.isin(self.kinds, _CONCRETE)
        for idx in np.flatnonzero(self.kinds == CellKind.EMPTY):
            peers = PEERS[idx]
            mask = FULL_MASK
            for value in self.data[peers][concrete[peers]]:
                mask &= ~(1 << int(value))
            self.kinds[idx] = CellKind.CANDIDATES
            self.data[idx] = mask
    
    def collapse(self, pos: Index, value: int) -> None:
        """
        Fix `pos` to `value` and remove `value` from the candidate mask of
        every Candidates cell in the same row, column, and box.
        
        This is a single propagation pass; it is not repeated to a fixpoint.
        """
        idx = _to_index(pos)
        self[idx] = Cell.collapsed(value)
        
        peers = PEERS[idx]
        open_peers = peers[self.kinds[peers] == CellKind.CANDIDATES]
        self.data[open_peers] &= ~(1 << value) & FULL_MASK
    
    def remove_candidate(self, pos: Index, value: int) -> None:
        """Drop `value` from the mask at `pos` if it is a Candidates cell."""
        self[pos] = self[pos].without_candidate(value)
    
    def uncollapsed_candidates(self) -> List[Tuple[Position, Cell]]:
        """All cells still in Candidates state, in row-major order."""
        return [
            (divmod(int(idx), SIZE), self[int(idx)])
            for idx in np.flatnonzero(self.kinds == CellKind.CANDIDATES)
        ]
    
    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------
    
    def count_kind(self, kind: CellKind) -> int:
        return int(np.sum(self.kinds == kind))
    
    def count_filled(self) -> int:
        """Count the cells holding a digit."""
        return int(np.sum(np.isin(self.kinds, _CONCRETE)))
    
    def is_complete(self) -> bool:
        """Check if every cell holds a digit."""
        return self.count_filled() == NUM_CELLS
    
    def is_valid(self) -> bool:
        """Check that no group holds a digit twice. Empty cells are ignored."""
        concrete = np.isin(self.kinds, _CONCRETE)
        for group in GROUPS:
            values = self.data[group][concrete[group]]
            if len(values) != len(set(values.tolist())):
                return False
        return True
    
    def is_solved(self) -> bool:
        return self.is_complete() and self.is_valid()
    
    def values(self) -> np.ndarray:
        """9x9 array of digits, 0 where a cell holds none."""
        concrete = np.isin(self.kinds, _CONCRETE)
        return np.where(concrete, self.data, 0).astype(np.int32).reshape(SIZE, SIZE)
    
    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------
    
    def to_string(self) -> str:
        """81-character string, 0 for cells without a digit."""
        return "".join(str(v) for v in self.values().flatten())
    
    @classmethod
    def from_string(cls, s: str) -> Board:
        """
        Create a board from an 81-character string.
        
        '0' or '.' mark empty cells; digits 1-9 become user values.
        """
        if len(s) != NUM_CELLS:
            raise ValueError(f"String length must be {NUM_CELLS}, got {len(s)}")
        
        board = cls()
        for idx, c in enumerate(s):
            if c in "0.":
                continue
            if not c.isdigit():
                raise ValueError(f"Unexpected character {c!r} at index {idx}")
            board[idx] = Cell.fixed(int(c))
        board.recompute_conflicts()
        return board
    
    def to_text(self) -> str:
        """Render in the board file format: 9 lines, space for empty."""
        lines = []
        for row in self.values():
            lines.append("".join(str(v) if v else " " for v in row).rstrip())
        return "\n".join(lines) + "\n"
    
    def __str__(self) -> str:
        """Pretty-print the board."""
        lines = []
        horizontal_sep = '+' + (('-' * (BOX_SIZE * 2 + 1)) + '+') * BOX_SIZE
        
        for i, row in enumerate(self.values()):
            if i % BOX_SIZE == 0:
                lines.append(horizontal_sep)
            
            row_str = '|'
            for j, val in enumerate(row):
                row_str += f' {val}' if val else ' .'
                if (j + 1) % BOX_SIZE == 0:
                    row_str += ' |'
            lines.append(row_str)
        
        lines.append(horizontal_sep)
        return '\n'.join(lines)
    
    def __repr__(self) -> str:
        return (
            f"Board(filled={self.count_filled()}, "
            f"candidates={self.count_kind(CellKind.CANDIDATES)}, "
            f"conflicting={self.count_kind(CellKind.CONFLICTING)})"
        )
    
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return False
        return np.array_equal(self.kinds, other.kinds) and np.array_equal(self.data, other.data)
    
    def __hash__(self) -> int:
        return hash((self.kinds.tobytes(), self.data.tobytes()))


def _to_index(pos: Index) -> int:
    if isinstance(pos, tuple):
        row, col = pos
        if not (0 <= row < SIZE and 0 <= col < SIZE):
            raise ValueError(f"Position out of range: {pos}")
        return row * SIZE + col
    idx = int(pos)
    if not 0 <= idx < NUM_CELLS:
        raise ValueError(f"Index out of range: {pos}")
    return idx
