"""Loading an initial board from the plain-text board format."""

from __future__ import annotations

from .board import Board, SIZE
from .cell import Cell


class BoardLoadError(ValueError):
    """Raised when board text cannot be turned into a Board."""


def parse_board(text: str) -> Board:
    """
    Parse board text.
    
    Up to 9 lines of up to 9 characters each: '1'-'9' set a user value,
    a space leaves the cell empty. Short lines and a short file are padded
    with empty cells. Any other character, or a digit beyond the ninth
    line or column, is an error.
    
    Raises:
        BoardLoadError: If the text is malformed.
    """
    board = Board()
    for i, line in enumerate(text.splitlines()):
        for j, c in enumerate(line):
            if c == " ":
                continue
            if c < "1" or c > "9":
                raise BoardLoadError(
                    f"Unexpected character {c!r} at line {i + 1}, column {j + 1}"
                )
            if i >= SIZE or j >= SIZE:
                raise BoardLoadError(
                    f"Expected max {SIZE} characters per line and max {SIZE} lines"
                )
            board[(i, j)] = Cell.fixed(int(c))
    
    board.recompute_conflicts()
    return board


def load_board(path: str) -> Board:
    """Read and parse a board file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise BoardLoadError(f"Couldn't read {path}: {e}") from e
    return parse_board(text)
