"""Shared fixtures and boards for the test suite."""

import pytest

from sudoku_wfc.core.board import Board


# A known solvable puzzle with a unique solution
TEST_PUZZLE = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)

TEST_SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)

# No duplicates anywhere, but (0, 7) and (0, 8) can both only hold 8.
DEAD_END_PUZZLE = (
    "123456700"
    "000000000"
    "000000000"
    "000000090"
    "000000000"
    "000000000"
    "000000009"
    "000000000"
    "000000000"
)


@pytest.fixture
def puzzle_board():
    return Board.from_string(TEST_PUZZLE)


@pytest.fixture
def dead_end_board():
    return Board.from_string(DEAD_END_PUZZLE)


class RecordingTicks:
    """Tick control that remembers start/stop calls."""
    
    def __init__(self):
        self.calls = []
    
    def start(self):
        self.calls.append("start")
    
    def stop(self):
        self.calls.append("stop")


@pytest.fixture
def ticks():
    return RecordingTicks()
