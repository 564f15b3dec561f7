"""Backtracking fill-in search and the public solving entry point.

The search keeps one shared grid and walks it depth first:

  1. Take the head of the ranked word list.
  2. Try each hole the word fits, writing it through :meth:`FillinGrid.assign`.
  3. Re-rank the remaining words against the remaining holes and recurse.
  4. On failure, hand the recorded trail back to :meth:`FillinGrid.undo`
     and move on to the next hole.

The first complete fill wins; siblings are never explored after it.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from ..core.constants import Engine
from ..core.exceptions import NoSolution, SolveTimeoutError, ValidationError
from ..core.models import Hole
from ..utils.logger import get_logger
from .cpsat import solve_with_cpsat
from .grid import FillinGrid
from .holes import extract_holes
from .ordering import order_by_length_frequency, rank_by_compatibility
from .validator import SolutionValidator


LOGGER = get_logger(__name__)

GridLike = Union[FillinGrid, Sequence[Sequence[str]]]


@dataclass
class SolverConfig:
    engine: Union[Engine, str] = Engine.BACKTRACKING
    timeout_seconds: Optional[float] = None
    validate_solution: bool = True
    cpsat_workers: int = 1


@dataclass
class SolveResult:
    grid: FillinGrid
    engine: Engine
    placements: List[Tuple[Hole, str]] = field(default_factory=list)
    assignments: int = 0
    backtracks: int = 0
    elapsed: float = 0.0


class BacktrackingSearch:
    """Depth-first assignment of words to holes with explicit undo."""

    def __init__(self, grid: FillinGrid, deadline: Optional[float] = None) -> None:
        self.grid = grid
        self.deadline = deadline
        self.assignments = 0
        self.backtracks = 0
        self._placements: List[Tuple[Hole, str]] = []

    def run(self, holes: Sequence[Hole], words: Sequence[str]) -> List[Tuple[Hole, str]]:
        """Fill ``holes`` with ``words`` (already in initial order) or raise :class:`NoSolution`."""

        if not self._search(list(holes), list(words)):
            raise NoSolution(
                f"Search exhausted after {self.assignments} assignments"
            )
        return list(self._placements)

    def _search(self, holes: List[Hole], words: List[str]) -> bool:
        if self.deadline is not None and time.monotonic() > self.deadline:
            raise SolveTimeoutError(
                f"Search deadline exceeded after {self.assignments} assignments"
            )
        if not words:
            return not holes

        word, rest = words[0], words[1:]
        for index, hole in enumerate(holes):
            trail = self.grid.assign(hole, word)
            if trail is None:
                continue
            self.assignments += 1
            self._placements.append((hole, word))
            LOGGER.debug("Placed %r in %s (depth %d)", word, hole.id, len(self._placements))

            remaining = holes[:index] + holes[index + 1:]
            solved = False
            try:
                solved = self._search(remaining, rank_by_compatibility(rest, remaining, self.grid))
            finally:
                if not solved:
                    self.grid.undo(trail)
                    self._placements.pop()
            if solved:
                return True
            self.backtracks += 1
        return False


class FillinSolver:
    """Runs the configured engine and checks its result."""

    def __init__(self, config: Optional[SolverConfig] = None) -> None:
        self.config = config or SolverConfig()
        self.validator = SolutionValidator()

    def solve(self, grid: GridLike, words: Iterable[str]) -> SolveResult:
        grid = as_grid(grid)
        words = list(words)
        engine = Engine(self.config.engine)
        holes = extract_holes(grid)
        LOGGER.info(
            "Solving %sx%s grid: %d holes, %d words (engine=%s)",
            grid.bounds.rows,
            grid.bounds.cols,
            len(holes),
            len(words),
            engine.value,
        )
        if len(holes) != len(words):
            LOGGER.warning("Word count %d does not match hole count %d", len(words), len(holes))
            raise NoSolution(f"{len(words)} words cannot fill {len(holes)} holes")

        blanks = [coord for coord in grid.open_cells() if grid.cell_at(*coord).letter is None]
        started = time.monotonic()
        result = SolveResult(grid=grid, engine=engine)
        try:
            if engine == Engine.CPSAT:
                result.placements = solve_with_cpsat(
                    grid,
                    words,
                    holes=holes,
                    timeout_seconds=self.config.timeout_seconds,
                    workers=self.config.cpsat_workers,
                )
                result.assignments = len(result.placements)
            else:
                deadline = (
                    started + self.config.timeout_seconds
                    if self.config.timeout_seconds is not None
                    else None
                )
                search = BacktrackingSearch(grid, deadline=deadline)
                try:
                    result.placements = search.run(holes, order_by_length_frequency(words))
                finally:
                    result.assignments = search.assignments
                    result.backtracks = search.backtracks
        except NoSolution:
            LOGGER.warning("No solution found after %.3fs", time.monotonic() - started)
            raise
        result.elapsed = time.monotonic() - started

        if self.config.validate_solution:
            validation = self.validator.validate(grid, words, holes)
            if not validation.ok:
                grid.undo(blanks)
                raise ValidationError("; ".join(validation.messages))

        LOGGER.info(
            "Solved in %.3fs (%d assignments, %d backtracks)",
            result.elapsed,
            result.assignments,
            result.backtracks,
        )
        return result


def as_grid(grid: GridLike) -> FillinGrid:
    if isinstance(grid, FillinGrid):
        return grid
    return FillinGrid.from_rows(grid)


def solve(grid: GridLike, words: Iterable[str], config: Optional[SolverConfig] = None) -> FillinGrid:
    """Fill ``grid`` with ``words`` and return the solved grid.

    A :class:`FillinGrid` argument is mutated in place and returned; plain
    rows of symbols are parsed first. Raises :class:`NoSolution` when no
    assignment exists, leaving the grid as it was.
    """

    return FillinSolver(config).solve(grid, words).grid
