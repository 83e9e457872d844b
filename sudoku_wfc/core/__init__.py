"""Core module for board representation, loading and validation."""

from .cell import Cell, CellKind, FULL_MASK
from .board import Board
from .loader import BoardLoadError, parse_board, load_board
from .validator import is_valid_solution

__all__ = [
    "Cell",
    "CellKind",
    "FULL_MASK",
    "Board",
    "BoardLoadError",
    "parse_board",
    "load_board",
    "is_valid_solution",
]
