"""Editing/solving state machine driving the solver one tick at a time."""

from __future__ import annotations
from abc import ABC
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol, Tuple

from ..core.board import Board, SIZE
from ..solvers.wfc_solver import WFCSolver, Complete, Impossible, InProgress
from .events import (
    Event, Move, Direction, NextCell, Digit, ClearCell, StartSolve,
    ClearSolved, ClearAll, ToggleHelp, Quit, Tick,
)


class Notice(Enum):
    """User-visible messages surfaced by state transitions."""
    BOARD_INVALID = "Can't start solving. Board is invalid"
    SOLVED = "Solved!"
    NO_SOLUTION = "No solution!"


class TickControl(Protocol):
    """Start/stop channel to the periodic tick source."""
    
    def start(self) -> None: ...
    
    def stop(self) -> None: ...


class NullTicks:
    """Tick control that does nothing, for headless driving."""
    
    def start(self) -> None:
        pass
    
    def stop(self) -> None:
        pass


@dataclass
class AppData:
    """Everything the states read and mutate."""
    board: Board = field(default_factory=Board)
    solver: WFCSolver = field(default_factory=WFCSolver)
    ticks: TickControl = field(default_factory=NullTicks)
    notice: Optional[Notice] = None
    show_help: bool = True


class State(ABC):
    """One interaction mode. Handlers return the next state, or None to stay."""
    
    def handle_event(self, data: AppData, event: Event) -> Optional[State]:
        return None
    
    def handle_tick(self, data: AppData) -> Optional[State]:
        return None
    
    def on_exit(self, data: AppData) -> None:
        """Called once when the machine leaves this state."""
    
    @property
    def cursor(self) -> Optional[Tuple[int, int]]:
        return None


class EditingState(State):
    """Cursor movement and cell edits; may hand off to SolvingState."""
    
    def __init__(self, selected: Tuple[int, int] = (0, 0)):
        self.selected = selected
    
    @property
    def cursor(self) -> Optional[Tuple[int, int]]:
        return self.selected
    
    def handle_event(self, data: AppData, event: Event) -> Optional[State]:
        row, col = self.selected
        
        if isinstance(event, Move):
            if event.direction is Direction.UP:
                row = (row - 1) % SIZE
            elif event.direction is Direction.DOWN:
                row = (row + 1) % SIZE
            elif event.direction is Direction.LEFT:
                col = (col - 1) % SIZE
            elif event.direction is Direction.RIGHT:
                col = (col + 1) % SIZE
            self.selected = (row, col)
        elif isinstance(event, NextCell):
            col += 1
            if col == SIZE:
                col = 0
                row = (row + 1) % SIZE
            self.selected = (row, col)
        elif isinstance(event, Digit):
            data.board.set_cell(self.selected, event.value)
        elif isinstance(event, ClearCell):
            data.board.set_cell(self.selected, None)
        elif isinstance(event, StartSolve):
            if not data.board.can_solve():
                data.notice = Notice.BOARD_INVALID
            else:
                return SolvingState(data)
        
        return None


class SolvingState(State):
    """
    Runs the solver one step per tick.
    
    Entering seeds the board, starts the solver and starts the ticks.
    Leaving by any path stops the ticks and drops the trail.
    """
    
    def __init__(self, data: AppData):
        data.notice = None
        data.board.seed_candidates()
        data.solver.start(data.board)
        data.ticks.start()
        self._stopped = False
    
    def handle_tick(self, data: AppData) -> Optional[State]:
        result = data.solver.step()
        
        if isinstance(result, Complete):
            data.board = result.board
            data.notice = Notice.SOLVED
            return EditingState()
        if isinstance(result, Impossible):
            data.board.clear_solver_state()
            data.notice = Notice.NO_SOLUTION
            return EditingState()
        if isinstance(result, InProgress):
            data.board = result.board
        
        return None
    
    def on_exit(self, data: AppData) -> None:
        if self._stopped:
            return
        self._stopped = True
        data.ticks.stop()
        data.solver.reset()


class StateMachine:
    """
    Serializes events from one inbox through the current state.
    
    Quit, ClearSolved, ClearAll and ToggleHelp are handled in every state.
    Everything else goes to the current state; ticks received while
    editing are ignored.
    """
    
    def __init__(self, data: Optional[AppData] = None):
        self.data = data if data is not None else AppData()
        self.state: State = EditingState()
        self.exit = False
    
    @property
    def is_solving(self) -> bool:
        return isinstance(self.state, SolvingState)
    
    def dispatch(self, event: Event) -> bool:
        """Process one event. Returns False once the app should exit."""
        if isinstance(event, Quit):
            self.state.on_exit(self.data)
            self.exit = True
        elif isinstance(event, ClearSolved):
            self._transition(EditingState())
            self.data.board.clear_solver_state()
        elif isinstance(event, ClearAll):
            self._transition(EditingState())
            self.data.board.clear_all()
        elif isinstance(event, ToggleHelp):
            self.data.show_help = not self.data.show_help
        elif isinstance(event, Tick):
            self._transition(self.state.handle_tick(self.data))
        else:
            self._transition(self.state.handle_event(self.data, event))
        
        return not self.exit
    
    def _transition(self, new_state: Optional[State]) -> None:
        if new_state is None:
            return
        self.state.on_exit(self.data)
        self.state = new_state
