"""Discrete events delivered to the interaction state machine."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Union


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Move:
    direction: Direction


@dataclass(frozen=True)
class NextCell:
    """Advance the cursor right, wrapping to the next row."""


@dataclass(frozen=True)
class Digit:
    value: int


@dataclass(frozen=True)
class ClearCell:
    pass


@dataclass(frozen=True)
class StartSolve:
    pass


@dataclass(frozen=True)
class ClearSolved:
    """Drop solver cells and return to editing."""


@dataclass(frozen=True)
class ClearAll:
    """Empty the whole board and return to editing."""


@dataclass(frozen=True)
class ToggleHelp:
    pass


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class Tick:
    """Periodic wake-up from the ticker."""


Event = Union[Move, NextCell, Digit, ClearCell, StartSolve, ClearSolved, ClearAll, ToggleHelp, Quit, Tick]
