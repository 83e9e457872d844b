"""Recording a step-by-step search trace."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import json
import os

from tqdm import tqdm

from ..core.board import Board
from ..core.cell import CellKind
from ..solvers.wfc_solver import WFCSolver, Complete, Impossible


@dataclass
class TraceStep:
    """One solver step as seen from outside."""
    step: int
    outcome: str  # "push", "pop", "complete" or "impossible"
    depth: int
    unresolved: int
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "step": self.step,
            "outcome": self.outcome,
            "depth": self.depth,
            "unresolved": self.unresolved,
        }


class SearchTrace:
    """
    Runs a WFCSolver on one board and records every step.
    
    Each recorded step carries the trail depth after the step and the
    number of cells still in Candidates state on the returned board.
    """
    
    def __init__(self, board: Board, seed: Optional[int] = None, max_steps: Optional[int] = None):
        """
        Args:
            board: Board as entered by the user. It is not modified.
            seed: Seed for the solver's value choices.
            max_steps: Stop recording after this many steps.
        
        Raises:
            ValueError: If the board has conflicting cells.
        """
        if not board.can_solve():
            raise ValueError("Board has conflicting cells")
        
        self.puzzle = board.copy()
        self.seed = seed
        self.max_steps = max_steps
        self.solver = WFCSolver(seed=seed)
        self.steps: List[TraceStep] = []
        self.solution: Optional[Board] = None
    
    def run(self, show_progress: bool = True) -> List[TraceStep]:
        """Run the search to the end (or to max_steps) and return the steps."""
        board = self.puzzle.copy()
        board.seed_candidates()
        self.solver.start(board)
        self.steps = []
        self.solution = None
        
        pbar = tqdm(desc="Solving", unit="step", disable=not show_progress)
        for result in self.solver.iter_steps(self.max_steps):
            previous_depth = self.steps[-1].depth if self.steps else 0
            
            if isinstance(result, Complete):
                self.solution = result.board
                outcome, depth, unresolved = "complete", previous_depth, 0
            elif isinstance(result, Impossible):
                outcome, depth, unresolved = "impossible", 0, 0
            else:
                depth = self.solver.depth
                outcome = "push" if depth > previous_depth else "pop"
                unresolved = result.board.count_kind(CellKind.CANDIDATES)
            
            self.steps.append(TraceStep(len(self.steps) + 1, outcome, depth, unresolved))
            pbar.update(1)
        pbar.close()
        
        return self.steps
    
    @property
    def outcome(self) -> str:
        """"solved", "impossible", or "incomplete" when max_steps cut the run short."""
        if not self.steps:
            return "incomplete"
        last = self.steps[-1].outcome
        if last == "complete":
            return "solved"
        if last == "impossible":
            return "impossible"
        return "incomplete"
    
    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics for the recorded run."""
        stats = self.solver.stats
        return {
            "puzzle": self.puzzle.to_string(),
            "solution": self.solution.to_string() if self.solution is not None else None,
            "seed": self.seed,
            "outcome": self.outcome,
            "steps": len(self.steps),
            "pushes": stats.nodes_explored,
            "pops": stats.backtracks,
            "max_depth": stats.max_depth,
        }
    
    def save_results(self, output_dir: str) -> List[str]:
        """Save the step log and summary as JSON. Returns the written paths."""
        os.makedirs(output_dir, exist_ok=True)
        
        steps_file = os.path.join(output_dir, "trace_steps.json")
        with open(steps_file, "w") as f:
            json.dump([s.to_dict() for s in self.steps], f, indent=2)
        
        summary_file = os.path.join(output_dir, "trace_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)
        
        return [steps_file, summary_file]
