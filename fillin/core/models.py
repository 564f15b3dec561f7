"""Data models supporting the fill-in solver."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .constants import CellType, Coord, Direction


@dataclass
class Cell:
    """Represents a grid cell.

    An open cell is unassigned while ``letter`` is ``None``. Pre-filled
    cells carry ``fixed=True`` and are never reset by an undo.
    """

    type: CellType = CellType.OPEN
    letter: Optional[str] = None
    fixed: bool = False

    def is_open(self) -> bool:
        return self.type == CellType.OPEN

    def is_empty(self) -> bool:
        return self.type == CellType.OPEN and self.letter is None

    def accepts(self, letter: str) -> bool:
        return self.letter is None or self.letter == letter


@dataclass(frozen=True)
class Hole:
    """A maximal run of open cells, stored as coordinates into the grid."""

    start_row: int
    start_col: int
    direction: Direction
    cells: List[Coord] = field(compare=False, hash=False)

    @property
    def id(self) -> str:
        prefix = "AC" if self.direction == Direction.ACROSS else "DN"
        return f"{prefix}_{self.start_row}_{self.start_col}"

    @property
    def length(self) -> int:
        return len(self.cells)
