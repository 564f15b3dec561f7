"""CLI entrypoint for the fill-in puzzle solver."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .core.constants import Engine
from .core.exceptions import NoSolution, PuzzleFormatError, SolveTimeoutError
from .engine.solver import FillinSolver, SolveResult, SolverConfig
from .io.puzzle_format import format_puzzle, read_puzzle, read_words
from .utils.logger import configure_logging, get_logger
from .utils.pretty import pretty_print_grid, print_solve_stats


LOGGER = get_logger(__name__)

EXIT_SOLVED = 0
EXIT_NO_SOLUTION = 1
EXIT_BAD_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Solve fill-in crossword puzzles",
    )
    parser.add_argument("puzzle", type=Path, help="Puzzle file (# blocked, _ blank, letters pre-filled)")
    parser.add_argument("words", type=Path, help="Word list file, one word per line")
    parser.add_argument("--output", type=Path, help="Write the solution here instead of stdout")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit a JSON payload with the grid and placements",
    )
    parser.add_argument(
        "--engine",
        type=str,
        choices=[e.value for e in Engine],
        default=Engine.BACKTRACKING.value,
        help="Search engine (default: backtracking)",
    )
    parser.add_argument("--timeout", type=float, default=None, help="Give up after this many seconds")
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Print the puzzle and solve statistics to stderr",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def build_payload(result: SolveResult) -> Dict[str, Any]:
    return {
        "engine": result.engine.value,
        "solution": ["".join(row) for row in result.grid.to_rows()],
        "grid": result.grid.to_jsonable(),
        "placements": [
            {
                "id": hole.id,
                "start": [hole.start_row, hole.start_col],
                "direction": hole.direction.value,
                "length": hole.length,
                "word": word,
            }
            for hole, word in result.placements
        ],
        "stats": {
            "assignments": result.assignments,
            "backtracks": result.backtracks,
            "elapsed": round(result.elapsed, 6),
        },
    }


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.WARNING)
    configure_logging(level)

    if args.timeout is not None and args.timeout <= 0:
        parser.error("--timeout must be positive")

    try:
        grid = read_puzzle(args.puzzle)
        words = read_words(args.words)
    except PuzzleFormatError as exc:
        LOGGER.error("Invalid input: %s", exc)
        return EXIT_BAD_INPUT

    if args.pretty:
        pretty_print_grid(grid, label="Puzzle:", stream=sys.stderr)

    config = SolverConfig(engine=args.engine, timeout_seconds=args.timeout)
    try:
        result = FillinSolver(config).solve(grid, words)
    except (NoSolution, SolveTimeoutError) as exc:
        LOGGER.error("No solution: %s", exc)
        print("No solution", file=sys.stderr)
        return EXIT_NO_SOLUTION

    if args.pretty:
        print("Solution:", file=sys.stderr)
        print_solve_stats(result, stream=sys.stderr)

    if args.json:
        output_text = json.dumps(build_payload(result), ensure_ascii=False, indent=2) + "\n"
    else:
        output_text = format_puzzle(result.grid)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        sys.stdout.write(output_text)
    return EXIT_SOLVED


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
