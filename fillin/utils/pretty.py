"""Pretty-print helpers for fill-in grids."""

from __future__ import annotations

import sys
from collections import Counter
from typing import TYPE_CHECKING

from ..core.constants import BLANK_SYMBOL, BLOCKED_SYMBOL, CellType
from ..core.models import Cell

if TYPE_CHECKING:
    from ..engine.grid import FillinGrid
    from ..engine.solver import SolveResult


def cell_symbol(cell: Cell) -> str:
    if cell.type == CellType.BLOCKED:
        return BLOCKED_SYMBOL
    return cell.letter or BLANK_SYMBOL


def format_grid(grid: FillinGrid) -> str:
    width = grid.bounds.cols
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * max(0, 3 * width - 1))
    for r in range(grid.bounds.rows):
        row_cells = [cell_symbol(grid.cell_at(r, c)) for c in range(width)]
        row_render = " ".join(f"{symbol:>2}" for symbol in row_cells)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def pretty_print_grid(grid: FillinGrid, *, label: str | None = None, stream=None) -> None:
    """Print the grid in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(grid), file=stream)


def print_solve_stats(result: SolveResult, *, stream=None) -> None:
    """Print the solved grid followed by search and word statistics."""

    stream = stream or sys.stdout
    print(format_grid(result.grid), file=stream)

    grid = result.grid
    total_cells = grid.bounds.rows * grid.bounds.cols
    open_cells = len(grid.open_cells())
    fixed_cells = sum(1 for r, c in grid.open_cells() if grid.cell_at(r, c).fixed)

    print(file=stream)
    print("--- Grid ---", file=stream)
    print(f"  Size:          {grid.bounds.rows} x {grid.bounds.cols} ({total_cells} cells)", file=stream)
    print(f"  Open cells:    {open_cells} ({fixed_cells} pre-filled)", file=stream)
    print(f"  Blocked:       {total_cells - open_cells}", file=stream)

    words = [word for _, word in result.placements]
    lengths = Counter(len(word) for word in words)
    print(file=stream)
    print("--- Words ---", file=stream)
    print(f"  Placed:        {len(words)}", file=stream)
    if lengths:
        dist_parts = [f"{length}:{count}" for length, count in sorted(lengths.items())]
        print(f"  Distribution:  {' '.join(dist_parts)}", file=stream)

    print(file=stream)
    print("--- Search ---", file=stream)
    print(f"  Engine:        {result.engine.value}", file=stream)
    print(f"  Assignments:   {result.assignments}", file=stream)
    print(f"  Backtracks:    {result.backtracks}", file=stream)
    print(f"  Elapsed:       {result.elapsed:.3f}s", file=stream)
