"""Solvers module for Sudoku boards."""

from .base_solver import BaseSolver, SolverStats
from .wfc_solver import WFCSolver, StepResult, InProgress, Complete, Impossible

__all__ = [
    "BaseSolver",
    "SolverStats",
    "WFCSolver",
    "StepResult",
    "InProgress",
    "Complete",
    "Impossible",
]
