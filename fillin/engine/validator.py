"""Deterministic integrity checks for solved grids."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..core.exceptions import ValidationError
from ..core.models import Hole
from ..utils.logger import get_logger
from .grid import FillinGrid
from .holes import extract_holes


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class SolutionValidator:
    """Checks that a grid is completely and exactly filled by a word list."""

    def validate(
        self,
        grid: FillinGrid,
        words: Sequence[str],
        holes: Optional[Sequence[Hole]] = None,
    ) -> ValidationResult:
        holes = list(holes) if holes is not None else extract_holes(grid)
        try:
            self._check_holes_filled(grid, holes)
            self._check_word_multiset(grid, holes, words)
        except ValidationError as exc:
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[])

    @staticmethod
    def _check_holes_filled(grid: FillinGrid, holes: Sequence[Hole]) -> None:
        if grid.is_complete(holes):
            return
        for hole in holes:
            for (row, col), letter in zip(hole.cells, grid.read(hole)):
                if letter is None:
                    raise ValidationError(f"Hole {hole.id} has a blank cell at ({row},{col})")

    @staticmethod
    def _check_word_multiset(grid: FillinGrid, holes: Sequence[Hole], words: Sequence[str]) -> None:
        placed = Counter("".join(letter or "" for letter in grid.read(hole)) for hole in holes)
        expected = Counter(words)
        if placed == expected:
            return
        missing = sorted((expected - placed).elements())
        unexpected = sorted((placed - expected).elements())
        raise ValidationError(
            f"Placed words differ from the word list (missing={missing}, unexpected={unexpected})"
        )
