"""Base solver interface and common utilities."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import time
import tracemalloc

from ..core.board import Board


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Core metrics
    solved: bool = False
    time_seconds: float = 0.0
    memory_bytes: int = 0
    iterations: int = 0
    
    # Search metrics
    backtracks: int = 0
    nodes_explored: int = 0
    max_depth: int = 0
    
    # Additional metadata
    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "max_depth": self.max_depth,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseSolver(ABC):
    """Abstract base class for whole-board solvers."""
    
    name: str = "BaseSolver"
    
    def __init__(self):
        self.stats = SolverStats(algorithm=self.name)
    
    def solve(self, board: Board) -> tuple[Optional[Board], SolverStats]:
        """
        Solve a board with timing and memory tracking.
        
        Args:
            board: The puzzle to solve. It is not modified.
            
        Returns:
            Tuple of (solution or None, stats).
        """
        self.stats = SolverStats(algorithm=self.name)
        
        tracemalloc.start()
        start_time = time.perf_counter()
        
        try:
            solution = self._solve(board.copy())
            self.stats.solved = solution is not None and solution.is_solved()
        except Exception as e:
            self.stats.extra["error"] = str(e)
            solution = None
        
        self.stats.time_seconds = time.perf_counter() - start_time
        
        _, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()
        self.stats.memory_bytes = peak
        
        return solution, self.stats
    
    @abstractmethod
    def _solve(self, board: Board) -> Optional[Board]:
        """
        Internal solve method to be implemented by subclasses.
        
        Args:
            board: A copy of the puzzle to solve (can be modified).
            
        Returns:
            The solved board, or None if no solution exists.
        """
        pass
    
    def reset_stats(self) -> None:
        """Reset solver statistics."""
        self.stats = SolverStats(algorithm=self.name)
