"""Interactive Sudoku board solved by wave function collapse."""

__version__ = "1.0.0"
