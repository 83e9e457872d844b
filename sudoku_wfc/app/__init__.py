"""Interactive app: events, state machine, tick source and terminal UI."""

from .events import (
    Direction, Move, NextCell, Digit, ClearCell, StartSolve,
    ClearSolved, ClearAll, ToggleHelp, Quit, Tick,
)
from .state import AppData, Notice, EditingState, SolvingState, StateMachine, NullTicks
from .ticker import Ticker

__all__ = [
    "Direction", "Move", "NextCell", "Digit", "ClearCell", "StartSolve",
    "ClearSolved", "ClearAll", "ToggleHelp", "Quit", "Tick",
    "AppData", "Notice", "EditingState", "SolvingState", "StateMachine",
    "NullTicks", "Ticker",
]
