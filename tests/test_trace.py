"""Unit tests for search trace recording."""

import json

import pytest
from sudoku_wfc.core.board import Board
from sudoku_wfc.analysis import SearchTrace

from conftest import TEST_PUZZLE, TEST_SOLUTION


class TestSearchTrace:
    """Tests for SearchTrace."""
    
    def test_trace_solved_puzzle(self):
        """A solvable puzzle ends with a complete step and a solution."""
        trace = SearchTrace(Board.from_string(TEST_PUZZLE), seed=0)
        steps = trace.run(show_progress=False)
        
        assert trace.outcome == "solved"
        assert steps[-1].outcome == "complete"
        assert trace.solution.to_string() == TEST_SOLUTION
        assert steps[-1].unresolved == 0
        
        summary = trace.get_summary()
        assert summary["steps"] == len(steps)
        assert summary["pushes"] + summary["pops"] == len(steps) - 1
        assert summary["pushes"] - summary["pops"] == 51
        assert [s.step for s in steps] == list(range(1, len(steps) + 1))
    
    def test_trace_does_not_modify_puzzle(self):
        """The input board is copied."""
        board = Board.from_string(TEST_PUZZLE)
        SearchTrace(board, seed=0).run(show_progress=False)
        assert board.to_string() == TEST_PUZZLE
    
    def test_trace_impossible(self, dead_end_board):
        """An unsatisfiable board records push, pop, impossible."""
        trace = SearchTrace(dead_end_board, seed=0)
        steps = trace.run(show_progress=False)
        
        assert [s.outcome for s in steps] == ["push", "pop", "impossible"]
        assert [s.depth for s in steps] == [1, 0, 0]
        assert trace.outcome == "impossible"
        assert trace.solution is None
    
    def test_max_steps(self):
        """A capped run is reported as incomplete."""
        trace = SearchTrace(Board(), seed=0, max_steps=10)
        steps = trace.run(show_progress=False)
        assert len(steps) == 10
        assert trace.outcome == "incomplete"
        assert all(s.outcome == "push" for s in steps)
    
    def test_conflicting_board_rejected(self):
        """Boards with conflicts cannot be traced."""
        board = Board()
        board.set_cell((0, 0), 5)
        board.set_cell((0, 1), 5)
        with pytest.raises(ValueError):
            SearchTrace(board)
    
    def test_save_results(self, tmp_path):
        """Steps and summary are written as JSON."""
        trace = SearchTrace(Board.from_string(TEST_PUZZLE), seed=0)
        trace.run(show_progress=False)
        paths = trace.save_results(str(tmp_path))
        
        assert len(paths) == 2
        with open(paths[0]) as f:
            steps = json.load(f)
        with open(paths[1]) as f:
            summary = json.load(f)
        assert len(steps) == summary["steps"]
        assert summary["outcome"] == "solved"
        assert summary["solution"] == TEST_SOLUTION


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
