"""Shared constants and enumerations for the fill-in solver."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class CellType(str, Enum):
    """All supported cell types in the grid."""

    OPEN = "OPEN"
    BLOCKED = "BLOCKED"


class Direction(str, Enum):
    """Orientation of a hole."""

    ACROSS = "ACROSS"
    DOWN = "DOWN"


class Engine(str, Enum):
    """Search engines available to :class:`~fillin.engine.solver.FillinSolver`."""

    BACKTRACKING = "backtracking"
    CPSAT = "cpsat"


BLOCKED_SYMBOL = "#"
BLANK_SYMBOL = "_"

# Holes shorter than this are single open cells and carry no constraint.
MIN_HOLE_LENGTH = 2

Coord = Tuple[int, int]


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int
