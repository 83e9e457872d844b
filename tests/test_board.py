"""Unit tests for the board constraint model."""

import pytest
from sudoku_wfc.core.board import Board
from sudoku_wfc.core.cell import Cell, CellKind, FULL_MASK
from sudoku_wfc.core.validator import is_valid_solution

from conftest import TEST_PUZZLE, TEST_SOLUTION


class TestBoardBasics:
    """Tests for construction, access and conversion."""
    
    def test_create_empty_board(self):
        """A new board has 81 empty cells and can be solved."""
        board = Board()
        assert board.count_kind(CellKind.EMPTY) == 81
        assert board.count_filled() == 0
        assert board.can_solve()
    
    def test_index_by_position_and_linear(self):
        """(row, col) and row-major linear indices address the same cell."""
        board = Board()
        board.set_cell((2, 5), 6)
        assert board[(2, 5)] == Cell.fixed(6)
        assert board[2 * 9 + 5] == Cell.fixed(6)
    
    def test_position_out_of_range(self):
        """Positions outside the grid are rejected."""
        board = Board()
        with pytest.raises(ValueError):
            board.set_cell((9, 0), 1)
        with pytest.raises(ValueError):
            board[81]
    
    def test_copy_is_independent(self):
        """Snapshots share no state with the original."""
        board = Board()
        board.set_cell((4, 4), 7)
        copy = board.copy()
        
        copy.set_cell((4, 4), 8)
        copy.seed_candidates()
        
        assert board[(4, 4)] == Cell.fixed(7)
        assert board.count_kind(CellKind.CANDIDATES) == 0
    
    def test_from_string_round_trip(self):
        """Puzzle strings load as user values."""
        board = Board.from_string(TEST_PUZZLE)
        assert board.to_string() == TEST_PUZZLE
        assert board[(0, 0)] == Cell.fixed(5)
        assert board[(0, 2)].is_empty
    
    def test_from_string_bad_length(self):
        """Strings must have exactly 81 characters."""
        with pytest.raises(ValueError):
            Board.from_string("123")
    
    def test_to_text(self):
        """Text output uses spaces for empty cells and trims line ends."""
        board = Board()
        board.set_cell((0, 0), 1)
        board.set_cell((0, 4), 5)
        lines = board.to_text().splitlines()
        assert len(lines) == 9
        assert lines[0] == "1   5"
        assert lines[1] == ""
    
    def test_group_views(self):
        """Row, column and box views each hold nine cells."""
        board = Board.from_string(TEST_SOLUTION)
        assert [c.value for c in board.get_row(0)] == [5, 3, 4, 6, 7, 8, 9, 1, 2]
        assert [c.value for c in board.get_col(0)] == [5, 6, 1, 8, 4, 7, 9, 2, 3]
        assert [c.value for c in board.get_box(4, 4)] == [7, 6, 1, 8, 5, 3, 9, 2, 4]
    
    def test_peers(self):
        """Every cell has 20 peers, excluding itself."""
        board = Board()
        peers = board.get_peers(4, 4)
        assert len(peers) == 20
        assert (4, 4) not in peers
        assert (4, 0) in peers
        assert (0, 4) in peers
        assert (3, 3) in peers
        assert (0, 0) not in peers


class TestConsistency:
    """Tests for conflict marking after set_cell."""
    
    def test_duplicate_in_row_marks_both(self):
        """Two 7s in row 0 make both cells Conflicting."""
        board = Board()
        board.set_cell((0, 0), 7)
        board.set_cell((0, 1), 7)
        
        assert board[(0, 0)].kind == CellKind.CONFLICTING
        assert board[(0, 1)].kind == CellKind.CONFLICTING
        assert not board.can_solve()
    
    def test_whole_group_is_marked(self):
        """Every user cell in a dirty group is Conflicting, not only the duplicates."""
        board = Board()
        board.set_cell((0, 5), 3)    # row 0 only
        board.set_cell((1, 0), 4)    # box 0 only
        board.set_cell((4, 4), 7)    # unrelated
        board.set_cell((0, 0), 7)
        board.set_cell((0, 1), 7)
        
        assert board[(0, 5)].kind == CellKind.CONFLICTING
        assert board[(1, 0)].kind == CellKind.CONFLICTING
        assert board[(4, 4)].kind == CellKind.FIXED
    
    def test_duplicate_in_column_and_box(self):
        """Column and box duplicates are detected independently."""
        board = Board()
        board.set_cell((0, 8), 2)
        board.set_cell((8, 8), 2)
        assert board[(0, 8)].kind == CellKind.CONFLICTING
        assert board[(8, 8)].kind == CellKind.CONFLICTING
        
        board.clear_all()
        board.set_cell((3, 3), 6)
        board.set_cell((5, 5), 6)
        assert board[(3, 3)].kind == CellKind.CONFLICTING
        assert board[(5, 5)].kind == CellKind.CONFLICTING
    
    def test_clearing_duplicate_restores_fixed(self):
        """Removing a duplicate turns the group back to Fixed."""
        board = Board()
        board.set_cell((0, 0), 7)
        board.set_cell((0, 1), 7)
        board.set_cell((0, 1), None)
        
        assert board[(0, 0)].kind == CellKind.FIXED
        assert board[(0, 1)].is_empty
        assert board.can_solve()
    
    def test_overwriting_duplicate_restores_fixed(self):
        """Changing a duplicate to a fresh value clears the conflict."""
        board = Board()
        board.set_cell((0, 0), 7)
        board.set_cell((0, 1), 7)
        board.set_cell((0, 1), 8)
        
        assert board[(0, 0)] == Cell.fixed(7)
        assert board[(0, 1)] == Cell.fixed(8)
    
    def test_collapsed_cells_count_but_keep_state(self):
        """A solver value conflicts with a new user value without changing kind."""
        board = Board()
        board.seed_candidates()
        board.collapse((0, 0), 7)
        board.set_cell((0, 1), 7)
        
        assert board[(0, 0)] == Cell.collapsed(7)
        assert board[(0, 1)] == Cell.conflicting(7)


class TestClearing:
    """Tests for clearing solver state and the whole board."""
    
    def test_clear_solver_state_keeps_user_cells(self):
        """Only Candidates and Collapsed cells return to Empty."""
        board = Board()
        board.set_cell((0, 0), 5)
        board.seed_candidates()
        board.collapse((1, 1), 3)
        
        board.clear_solver_state()
        
        assert board[(0, 0)] == Cell.fixed(5)
        assert board[(1, 1)].is_empty
        assert board.count_kind(CellKind.EMPTY) == 80
    
    def test_clear_all(self):
        """clear_all empties every cell, including conflicting ones."""
        board = Board()
        board.set_cell((0, 0), 5)
        board.set_cell((0, 1), 5)
        board.clear_all()
        
        assert board.count_kind(CellKind.EMPTY) == 81
        assert board.can_solve()


class TestPropagation:
    """Tests for candidate seeding and collapse."""
    
    def test_seed_candidates(self):
        """Empty cells get every digit not used by a peer."""
        board = Board()
        board.set_cell((0, 0), 5)
        board.set_cell((0, 1), 3)
        board.seed_candidates()
        
        cell = board[(0, 2)]
        assert cell.kind == CellKind.CANDIDATES
        assert cell.entropy == 7
        assert not cell.has_candidate(5)
        assert not cell.has_candidate(3)
        
        assert board[(4, 0)].entropy == 8
        assert board[(8, 8)].mask == FULL_MASK
        assert board[(0, 0)] == Cell.fixed(5)
    
    def test_collapse_propagates_to_peers_only(self):
        """Collapsing removes the value from peers and leaves other cells alone."""
        board = Board()
        board.seed_candidates()
        board.collapse((4, 4), 5)
        
        assert board[(4, 4)] == Cell.collapsed(5)
        peers = board.get_peers(4, 4)
        for pos, cell in board.cells():
            if pos == (4, 4):
                continue
            if pos in peers:
                assert not cell.has_candidate(5)
                assert cell.entropy == 8
            else:
                assert cell.mask == FULL_MASK
    
    def test_collapse_leaves_concrete_peers(self):
        """User values among the peers are not touched."""
        board = Board()
        board.set_cell((4, 0), 5)
        board.seed_candidates()
        board.collapse((4, 4), 1)
        assert board[(4, 0)] == Cell.fixed(5)
    
    def test_uncollapsed_candidates(self):
        """Only Candidates cells are listed, in row-major order."""
        board = Board()
        board.set_cell((0, 0), 1)
        board.seed_candidates()
        board.collapse((0, 1), 2)
        
        open_cells = board.uncollapsed_candidates()
        positions = [pos for pos, _ in open_cells]
        assert len(open_cells) == 79
        assert positions[0] == (0, 2)
        assert positions == sorted(positions)
        assert all(cell.is_candidates for _, cell in open_cells)


class TestValidator:
    """Tests for solution validation."""
    
    def test_valid_solution(self):
        """The known solution validates against its puzzle."""
        puzzle = Board.from_string(TEST_PUZZLE)
        solution = Board.from_string(TEST_SOLUTION)
        assert is_valid_solution(puzzle, solution)
    
    def test_solution_must_keep_clues(self):
        """A valid grid that disagrees with a clue is rejected."""
        puzzle = Board()
        puzzle.set_cell((0, 0), 6)
        solution = Board.from_string(TEST_SOLUTION)
        assert not is_valid_solution(puzzle, solution)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
