"""Steppable backtracking solver in the wave function collapse style."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List, Optional, Union
import random

from .base_solver import BaseSolver
from ..core.board import Board


@dataclass(frozen=True)
class InProgress:
    """The search made one decision; `board` is the new top of the trail."""
    board: Board


@dataclass(frozen=True)
class Complete:
    """Every cell holds a digit; `board` is the solution."""
    board: Board


@dataclass(frozen=True)
class Impossible:
    """The trail was exhausted: the seeded board has no solution."""


StepResult = Union[InProgress, Complete, Impossible]


class WFCSolver(BaseSolver):
    """
    Incremental backtracking search over candidate masks.
    
    The solver keeps a trail of full board snapshots. Each call to `step`
    makes exactly one decision:
    - pick the Candidates cell with the fewest remaining values (MRV),
      earliest in row-major order on ties
    - pick one of its values at random, strike it from the parent snapshot,
      and push a copy with that value collapsed
    - or, if the cell has no values left, pop the top snapshot
    
    Striking the value from the parent before pushing means a branch that
    is later abandoned is never retried, so the search always terminates.
    """
    
    name = "WFC+Backtracking"
    
    def __init__(self, seed: Optional[int] = None):
        """
        Initialize the solver.
        
        Args:
            seed: Seed for the value choice at each step. None uses fresh
                  randomness.
        """
        super().__init__()
        self.rng = random.Random(seed)
        self.trail: List[Board] = []
    
    def start(self, board: Board) -> None:
        """
        Reset the trail to a single snapshot of `board`.
        
        The caller seeds candidates first (Board.seed_candidates).
        """
        self.trail = [board.copy()]
        self.reset_stats()
    
    def reset(self) -> None:
        """Discard the trail."""
        self.trail = []
    
    @property
    def is_active(self) -> bool:
        return bool(self.trail)
    
    @property
    def depth(self) -> int:
        """Number of tentative decisions on the trail."""
        return max(len(self.trail) - 1, 0)
    
    def step(self) -> StepResult:
        """Advance the search by one decision and return the new frontier."""
        if not self.trail:
            raise RuntimeError("step() called without an active search; call start() first")
        
        top = self.trail[-1]
        possibilities = [(pos, cell.entropy) for pos, cell in top.uncollapsed_candidates()]
        if not possibilities:
            return Complete(top.copy())
        
        # Stable sort: the first cell in row-major order wins ties.
        possibilities.sort(key=lambda p: p[1])
        pos, _ = possibilities[0]
        values = top[pos].candidate_values()
        
        self.stats.iterations += 1
        if values:
            value = self.rng.choice(values)
            child = top.copy()
            top.remove_candidate(pos, value)
            child.collapse(pos, value)
            self.trail.append(child)
            self.stats.nodes_explored += 1
            self.stats.max_depth = max(self.stats.max_depth, self.depth)
        else:
            self.trail.pop()
            self.stats.backtracks += 1
            if not self.trail:
                return Impossible()
        
        return InProgress(self.trail[-1].copy())
    
    def iter_steps(self, max_steps: Optional[int] = None) -> Iterator[StepResult]:
        """
        Yield step results until the search ends.
        
        The last item yielded is Complete or Impossible, unless `max_steps`
        is reached first.
        """
        count = 0
        while max_steps is None or count < max_steps:
            result = self.step()
            count += 1
            yield result
            if not isinstance(result, InProgress):
                self.reset()
                return
    
    def _solve(self, board: Board) -> Optional[Board]:
        """Seed `board`, then step until the search finishes."""
        if not board.can_solve():
            return None
        
        board.seed_candidates()
        self.start(board)
        
        result: StepResult = Impossible()
        for result in self.iter_steps():
            pass
        
        if isinstance(result, Complete):
            return result.board
        return None
