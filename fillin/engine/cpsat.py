"""CP-SAT fill-in solver using OR-Tools."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Tuple

from ortools.sat.python import cp_model

from ..core.constants import Coord
from ..core.exceptions import NoSolution, SolveTimeoutError, ValidationError
from ..core.models import Hole
from ..utils.logger import get_logger
from .grid import FillinGrid
from .holes import extract_holes

LOGGER = get_logger(__name__)


def solve_with_cpsat(
    grid: FillinGrid,
    words: Sequence[str],
    holes: Optional[Sequence[Hole]] = None,
    timeout_seconds: Optional[float] = None,
    workers: int = 1,
) -> List[Tuple[Hole, str]]:
    """Assign every word to a hole via CP-SAT and write the result into ``grid``.

    Args:
        grid: FillinGrid to fill; left untouched unless a solution is found.
        words: Word multiset; duplicates must each occupy their own hole.
        holes: Precomputed holes, extracted from ``grid`` when omitted.
        timeout_seconds: Solver time limit in seconds.
        workers: Number of CP-SAT search workers.

    Returns:
        List of (Hole, word) placements in hole order.

    Raises:
        NoSolution: the model is infeasible.
        SolveTimeoutError: the time limit elapsed before a verdict.
    """
    holes = list(holes) if holes is not None else extract_holes(grid)
    words = list(words)
    if len(holes) != len(words):
        raise NoSolution(f"{len(words)} words cannot fill {len(holes)} holes")
    if not holes:
        return []

    model = cp_model.CpModel()

    # ------------------------------------------------------------------
    # Step 1: Cell letter variables
    # ------------------------------------------------------------------
    alphabet = sorted(
        {letter for word in words for letter in word}
        | {letter for hole in holes for letter in grid.read(hole) if letter is not None}
    )
    letter_index = {letter: index for index, letter in enumerate(alphabet)}
    cell_vars: Dict[Coord, object] = {}  # (r,c) -> IntVar or int

    for hole in holes:
        for r, c in hole.cells:
            if (r, c) in cell_vars:
                continue
            existing = grid.cell_at(r, c).letter
            if existing is not None:
                cell_vars[(r, c)] = letter_index[existing]
            else:
                cell_vars[(r, c)] = model.new_int_var(0, len(alphabet) - 1, f"L_{r}_{c}")

    # ------------------------------------------------------------------
    # Step 2: Placement literals tied to cell letters
    # ------------------------------------------------------------------
    by_word: Dict[int, List[cp_model.IntVar]] = defaultdict(list)
    by_hole: Dict[int, List[Tuple[int, cp_model.IntVar]]] = defaultdict(list)

    for w, word in enumerate(words):
        for h, hole in enumerate(holes):
            if not grid.fits(hole, word):
                continue
            literal = model.new_bool_var(f"x_{w}_{h}")
            by_word[w].append(literal)
            by_hole[h].append((w, literal))
            for (r, c), letter in zip(hole.cells, word):
                var = cell_vars[(r, c)]
                if isinstance(var, cp_model.IntVar):
                    model.add(var == letter_index[letter]).only_enforce_if(literal)

    # ------------------------------------------------------------------
    # Step 3: Every word once, every hole once
    # ------------------------------------------------------------------
    for w, word in enumerate(words):
        if not by_word[w]:
            LOGGER.debug("Word %r fits no hole", word)
            raise NoSolution(f"Word {word!r} fits no hole")
        model.add_exactly_one(by_word[w])

    for h, hole in enumerate(holes):
        if not by_hole[h]:
            LOGGER.debug("Hole %s accepts no word", hole.id)
            raise NoSolution(f"Hole {hole.id} accepts no word")
        model.add_exactly_one([literal for _, literal in by_hole[h]])

    # ------------------------------------------------------------------
    # Step 4: Solve
    # ------------------------------------------------------------------
    solver = cp_model.CpSolver()
    if timeout_seconds is not None:
        solver.parameters.max_time_in_seconds = timeout_seconds
    solver.parameters.num_workers = workers

    LOGGER.info(
        "CP-SAT: %d holes, %d words, %d cell vars, solving (timeout=%s)...",
        len(holes),
        len(words),
        sum(1 for v in cell_vars.values() if isinstance(v, cp_model.IntVar)),
        timeout_seconds,
    )

    status = solver.solve(model)

    if status == cp_model.UNKNOWN:
        LOGGER.warning("CP-SAT: no verdict within %ss", timeout_seconds)
        raise SolveTimeoutError(f"CP-SAT reached its time limit ({timeout_seconds}s)")
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        LOGGER.warning("CP-SAT: no solution found (status=%s)", solver.status_name(status))
        raise NoSolution(f"CP-SAT status {solver.status_name(status)}")

    LOGGER.info("CP-SAT: solution found in %.2fs", solver.wall_time)

    # ------------------------------------------------------------------
    # Step 5: Extract solution and write it through the grid
    # ------------------------------------------------------------------
    placements: List[Tuple[Hole, str]] = []
    for h, hole in enumerate(holes):
        for w, literal in by_hole[h]:
            if solver.boolean_value(literal):
                placements.append((hole, words[w]))
                break

    trails: List[List[Coord]] = []
    for hole, word in placements:
        trail = grid.assign(hole, word)
        if trail is None:
            for applied in reversed(trails):
                grid.undo(applied)
            raise ValidationError(f"CP-SAT placement of {word!r} conflicts at hole {hole.id}")
        trails.append(trail)
    return placements
