"""Hole extraction: every maximal across and down run of open cells."""

from __future__ import annotations

from typing import List

from ..core.constants import MIN_HOLE_LENGTH, Coord, Direction
from ..core.models import Hole
from ..utils.logger import get_logger
from .grid import FillinGrid


LOGGER = get_logger(__name__)


def extract_holes(grid: FillinGrid) -> List[Hole]:
    """Return the across holes followed by the down holes.

    Rows are scanned bottom to top and columns right to left, each run kept
    in reading order; the search tries holes in this order.

    Only the cell types matter, so the result is the same whatever letters
    the grid currently holds.
    """

    holes: List[Hole] = []
    # Across
    for r in reversed(range(grid.bounds.rows)):
        holes.extend(_scan_line(grid, [(r, c) for c in range(grid.bounds.cols)], Direction.ACROSS))
    # Down
    for c in reversed(range(grid.bounds.cols)):
        holes.extend(_scan_line(grid, [(r, c) for r in range(grid.bounds.rows)], Direction.DOWN))

    LOGGER.debug(
        "Extracted %d holes (%d across, %d down)",
        len(holes),
        sum(1 for hole in holes if hole.direction == Direction.ACROSS),
        sum(1 for hole in holes if hole.direction == Direction.DOWN),
    )
    return holes


def _scan_line(grid: FillinGrid, line: List[Coord], direction: Direction) -> List[Hole]:
    holes: List[Hole] = []
    run: List[Coord] = []
    for row, col in line:
        if grid.cell_at(row, col).is_open():
            run.append((row, col))
            continue
        _close_run(run, direction, holes)
        run = []
    _close_run(run, direction, holes)
    return holes


def _close_run(run: List[Coord], direction: Direction, holes: List[Hole]) -> None:
    if len(run) < MIN_HOLE_LENGTH:
        return
    start_row, start_col = run[0]
    holes.append(Hole(start_row=start_row, start_col=start_col, direction=direction, cells=list(run)))
