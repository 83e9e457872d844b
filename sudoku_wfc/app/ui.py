"""Curses front end: board rendering, key decoding and the main loop."""

from __future__ import annotations
from typing import Optional, Union
import curses
import locale
import queue

from ..core.board import Board, SIZE, BOX_SIZE
from ..core.cell import CellKind
from ..solvers.wfc_solver import WFCSolver
from .events import (
    Event, Move, Direction, NextCell, Digit, ClearCell, StartSolve,
    ClearSolved, ClearAll, ToggleHelp, Quit,
)
from .state import AppData, StateMachine
from .ticker import Ticker, DEFAULT_INTERVAL


CELL_WIDTH = 7
CELL_HEIGHT = 3
BOARD_HEIGHT = (CELL_HEIGHT + 1) * SIZE + 1
NOTICE_ROW = BOARD_HEIGHT + 1
HELP_ROW = BOARD_HEIGHT + 3
KEY_POLL_MS = 10

HELP_TEXT = """Keybinds:
  ?         -> toggle this message
  arrows    -> move around the board
  tab       -> go to next space
  1..9      -> set current space
  backspace -> clear current space
  s         -> start solving
  c         -> clear solved spaces
  C         -> clear entire board
  q or esc  -> quit"""

_PAIR_FIXED = 1
_PAIR_CONFLICTING = 2
_PAIR_COLLAPSED = 3
_PAIR_BORDER = 4

_ARROWS = {
    curses.KEY_UP: Direction.UP,
    curses.KEY_DOWN: Direction.DOWN,
    curses.KEY_LEFT: Direction.LEFT,
    curses.KEY_RIGHT: Direction.RIGHT,
    "k": Direction.UP,
    "j": Direction.DOWN,
    "h": Direction.LEFT,
    "l": Direction.RIGHT,
}

_COMMANDS = {
    "\t": NextCell(),
    "s": StartSolve(),
    "c": ClearSolved(),
    "C": ClearAll(),
    "?": ToggleHelp(),
    "q": Quit(),
    "\x1b": Quit(),
    "\x03": Quit(),   # Ctrl-C
    "\x04": Quit(),   # Ctrl-D
    "\x7f": ClearCell(),
    "\b": ClearCell(),
    curses.KEY_BACKSPACE: ClearCell(),
    curses.KEY_DC: ClearCell(),
}


def decode_key(key: Union[int, str]) -> Optional[Event]:
    """Map a curses key (from get_wch) to an event, or None if unbound."""
    if key in _ARROWS:
        return Move(_ARROWS[key])
    if key in _COMMANDS:
        return _COMMANDS[key]
    if isinstance(key, str) and len(key) == 1 and "1" <= key <= "9":
        return Digit(int(key))
    return None


class Renderer:
    """Draws the board, the current notice and the help panel."""
    
    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.init_colors()
    
    def init_colors(self) -> None:
        if not curses.has_colors():
            return
        curses.start_color()
        curses.use_default_colors()
        curses.init_pair(_PAIR_FIXED, curses.COLOR_BLUE, -1)
        curses.init_pair(_PAIR_CONFLICTING, curses.COLOR_RED, -1)
        curses.init_pair(_PAIR_COLLAPSED, curses.COLOR_GREEN, -1)
        curses.init_pair(_PAIR_BORDER, curses.COLOR_WHITE, -1)
    
    def draw(self, machine: StateMachine) -> None:
        data = machine.data
        self.stdscr.erase()
        self.draw_board(data.board)
        if data.notice is not None:
            self._put(NOTICE_ROW, 0, data.notice.value)
        if data.show_help:
            for i, line in enumerate(HELP_TEXT.splitlines()):
                self._put(HELP_ROW + i, 0, line)
        self.place_cursor(machine.state.cursor)
        self.stdscr.refresh()
    
    def draw_board(self, board: Board) -> None:
        border = curses.color_pair(_PAIR_BORDER) | curses.A_DIM
        
        for i in range(SIZE + 1):
            y = i * (CELL_HEIGHT + 1)
            ch = "═" if i % BOX_SIZE == 0 else "─"
            self._put(y, 0, ch * ((CELL_WIDTH + 1) * SIZE + 1), border)
        
        for row in range(SIZE):
            for line in range(CELL_HEIGHT):
                y = row * (CELL_HEIGHT + 1) + line + 1
                for col in range(SIZE + 1):
                    sep = "║" if col % BOX_SIZE == 0 else "│"
                    self._put(y, col * (CELL_WIDTH + 1), sep, border)
                for col in range(SIZE):
                    self._draw_cell_line(board, row, col, line, y)
    
    def _draw_cell_line(self, board: Board, row: int, col: int, line: int, y: int) -> None:
        cell = board[(row, col)]
        x = col * (CELL_WIDTH + 1) + 1
        
        if cell.is_candidates:
            # Candidates as a 3x3 keypad: line 0 shows 1-3, line 1 4-6, line 2 7-9.
            digits = [line * 3 + k for k in (1, 2, 3)]
            text = " " + " ".join(str(d) if cell.has_candidate(d) else " " for d in digits) + " "
            self._put(y, x, text, curses.A_DIM)
        elif cell.is_concrete and line == CELL_HEIGHT // 2:
            pair = {
                CellKind.FIXED: _PAIR_FIXED,
                CellKind.CONFLICTING: _PAIR_CONFLICTING,
                CellKind.COLLAPSED: _PAIR_COLLAPSED,
            }[cell.kind]
            self._put(y, x + CELL_WIDTH // 2, str(cell.value), curses.color_pair(pair) | curses.A_BOLD)
    
    def place_cursor(self, pos) -> None:
        try:
            if pos is None:
                curses.curs_set(0)
                return
            row, col = pos
            y = (CELL_HEIGHT + 1) * row + CELL_HEIGHT // 2 + 1
            x = (CELL_WIDTH + 1) * col + CELL_WIDTH // 2 + 1
            curses.curs_set(1)
            self.stdscr.move(y, x)
        except curses.error:
            pass  # cursor visibility unsupported or terminal too small
    
    def _put(self, y: int, x: int, text: str, attr: int = 0) -> None:
        try:
            self.stdscr.addstr(y, x, text, attr)
        except curses.error:
            pass  # clipped by a small terminal


def run_app(
    board: Optional[Board] = None,
    interval: float = DEFAULT_INTERVAL,
    seed: Optional[int] = None,
) -> None:
    """Run the interactive terminal app until the user quits."""
    locale.setlocale(locale.LC_ALL, "")
    curses.wrapper(_main, board, interval, seed)


def _main(stdscr, board: Optional[Board], interval: float, seed: Optional[int]) -> None:
    curses.raw()
    curses.noecho()
    stdscr.keypad(True)
    stdscr.timeout(KEY_POLL_MS)
    
    inbox: queue.Queue = queue.Queue()
    renderer = Renderer(stdscr)
    
    with Ticker(inbox, interval) as ticker:
        data = AppData(
            board=board if board is not None else Board(),
            solver=WFCSolver(seed=seed),
            ticks=ticker,
        )
        machine = StateMachine(data)
        renderer.draw(machine)
        
        while True:
            try:
                key = stdscr.get_wch()
            except curses.error:
                key = None
            if key is not None:
                event = decode_key(key)
                if event is not None:
                    inbox.put(event)
            
            dirty = False
            while True:
                try:
                    event = inbox.get_nowait()
                except queue.Empty:
                    break
                if not machine.dispatch(event):
                    return
                dirty = True
            
            if dirty:
                renderer.draw(machine)
