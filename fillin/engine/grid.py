"""Grid representation and the assign/undo primitives used by the search."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from ..core.constants import BLANK_SYMBOL, BLOCKED_SYMBOL, Bounds, CellType, Coord
from ..core.exceptions import MalformedGridError
from ..core.models import Cell, Hole
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class FillinGrid:
    """The shared cell matrix every hole points into.

    Holes never own cells: all reads and writes go through the grid, so a
    letter written through an across hole is immediately visible to the
    down hole crossing it.
    """

    def __init__(self, cells: List[List[Cell]]) -> None:
        widths = {len(row) for row in cells}
        if len(widths) > 1:
            raise MalformedGridError(
                f"Grid rows have unequal lengths: {sorted(widths)}"
            )
        self.cells = cells
        self.bounds = Bounds(rows=len(cells), cols=widths.pop() if widths else 0)

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[str]]) -> "FillinGrid":
        """Build a grid from rows of cell symbols.

        ``#`` is a blocked cell, ``_`` a blank one, and any other single
        character a pre-filled letter.
        """

        cells: List[List[Cell]] = []
        for r, row in enumerate(rows):
            parsed: List[Cell] = []
            for c, symbol in enumerate(row):
                if not isinstance(symbol, str) or len(symbol) != 1:
                    raise MalformedGridError(f"Invalid cell symbol {symbol!r} at ({r},{c})")
                if symbol == BLOCKED_SYMBOL:
                    parsed.append(Cell(type=CellType.BLOCKED))
                elif symbol == BLANK_SYMBOL:
                    parsed.append(Cell())
                else:
                    parsed.append(Cell(letter=symbol, fixed=True))
            cells.append(parsed)
        grid = cls(cells)
        LOGGER.debug("Parsed %sx%s grid", grid.bounds.rows, grid.bounds.cols)
        return grid

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def cell_at(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def open_cells(self) -> List[Coord]:
        return [
            (r, c)
            for r in range(self.bounds.rows)
            for c in range(self.bounds.cols)
            if self.cells[r][c].is_open()
        ]

    def read(self, hole: Hole) -> List[Optional[str]]:
        """Current letters along ``hole``; ``None`` marks a blank."""

        return [self.cells[r][c].letter for r, c in hole.cells]

    def fits(self, hole: Hole, word: str) -> bool:
        """Whether ``word`` could be written into ``hole`` right now."""

        if len(word) != len(hole.cells):
            return False
        for (row, col), letter in zip(hole.cells, word):
            if not self.cells[row][col].accepts(letter):
                return False
        return True

    def is_complete(self, holes: Iterable[Hole]) -> bool:
        return all(letter is not None for hole in holes for letter in self.read(hole))

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def assign(self, hole: Hole, word: str) -> Optional[List[Coord]]:
        """Write ``word`` into ``hole`` and return the newly assigned coordinates.

        Nothing is written unless every position is compatible, in which
        case ``None`` is returned. Cells that already hold the matching
        letter are left untouched and are not part of the returned trail.
        """

        if not self.fits(hole, word):
            return None

        # All checks passed, mutate grid
        trail: List[Coord] = []
        for (row, col), letter in zip(hole.cells, word):
            cell = self.cells[row][col]
            if cell.letter is None:
                cell.letter = letter
                trail.append((row, col))
        return trail

    def undo(self, trail: Iterable[Coord]) -> None:
        """Reset exactly the coordinates returned by a successful :meth:`assign`."""

        for row, col in trail:
            cell = self.cells[row][col]
            if not cell.fixed:
                cell.letter = None

    # ------------------------------------------------------------------
    # Serialization helpers
    # ------------------------------------------------------------------
    def to_rows(self) -> List[List[str]]:
        rows: List[List[str]] = []
        for row in self.cells:
            rendered: List[str] = []
            for cell in row:
                if cell.type == CellType.BLOCKED:
                    rendered.append(BLOCKED_SYMBOL)
                else:
                    rendered.append(cell.letter or BLANK_SYMBOL)
            rows.append(rendered)
        return rows

    def to_jsonable(self) -> List[List[dict]]:
        return [
            [
                {"type": cell.type.value, "letter": cell.letter, "fixed": cell.fixed}
                for cell in row
            ]
            for row in self.cells
        ]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FillinGrid):
            return NotImplemented
        return self.to_rows() == other.to_rows()

    def __repr__(self) -> str:
        return f"FillinGrid({self.bounds.rows}x{self.bounds.cols})"
