"""Validation utilities for solved boards."""

from __future__ import annotations
from typing import TYPE_CHECKING

from .cell import CellKind

if TYPE_CHECKING:
    from .board import Board


def is_valid_solution(puzzle: Board, solution: Board) -> bool:
    """
    Validate that a solution correctly solves the puzzle.
    
    Args:
        puzzle: The board as the user entered it.
        solution: The proposed solution.
        
    Returns:
        True if solution is complete, valid, keeps every user value of the
        puzzle, and has no cells left in Candidates state.
    """
    if solution.count_kind(CellKind.CANDIDATES):
        return False
    
    for (pos, cell) in puzzle.cells():
        if cell.is_concrete and solution[pos].value != cell.value:
            return False
    
    return solution.is_solved()
