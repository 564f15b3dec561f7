"""Plain-text puzzle, word list and solution files.

A puzzle file holds one grid row per line and one character per cell:
``#`` blocked, ``_`` blank, anything else a pre-filled letter. A word file
holds one word per line. Solutions are written back in the puzzle format.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

from ..core.exceptions import MalformedGridError, PuzzleFormatError
from ..engine.grid import FillinGrid
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


def parse_puzzle(text: str) -> FillinGrid:
    lines = text.splitlines()
    while lines and not lines[-1].strip():
        lines.pop()
    for number, line in enumerate(lines, start=1):
        if not line:
            raise PuzzleFormatError(f"Blank line {number} inside puzzle")
    try:
        return FillinGrid.from_rows(lines)
    except MalformedGridError as exc:
        raise PuzzleFormatError(str(exc)) from exc


def parse_words(text: str) -> List[str]:
    """Read words, one entry per line. Blank lines are skipped."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def format_puzzle(grid: FillinGrid) -> str:
    return "".join("".join(row) + "\n" for row in grid.to_rows())


def read_puzzle(path: Path | str) -> FillinGrid:
    grid = parse_puzzle(_read_text(path))
    LOGGER.info("Loaded %sx%s puzzle from %s", grid.bounds.rows, grid.bounds.cols, path)
    return grid


def read_words(path: Path | str) -> List[str]:
    words = parse_words(_read_text(path))
    LOGGER.info("Loaded %d words from %s", len(words), path)
    return words


def write_puzzle(path: Path | str, grid: FillinGrid) -> None:
    Path(path).write_text(format_puzzle(grid), encoding="utf-8")


def _read_text(path: Path | str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise PuzzleFormatError(f"Cannot read {path}: {exc}") from exc
