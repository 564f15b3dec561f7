"""Solver package for fill-in crossword puzzles.

This package exposes the public API surface via:

- ``fillin.engine.solver.solve``: fill a grid with a word list or raise
  ``NoSolution``.
- ``fillin.engine.solver.FillinSolver``: the same search with statistics
  and a choice of engine.
- ``fillin.engine.grid.FillinGrid``: the shared cell matrix.
- ``fillin.io.puzzle_format`` helpers: reading and writing puzzle files.
"""

from .core.constants import Engine
from .core.exceptions import FillinError, MalformedGridError, NoSolution, SolveTimeoutError
from .engine.grid import FillinGrid
from .engine.holes import extract_holes
from .engine.solver import FillinSolver, SolveResult, SolverConfig, solve

__all__ = [
    "Engine",
    "FillinError",
    "FillinGrid",
    "FillinSolver",
    "MalformedGridError",
    "NoSolution",
    "SolveResult",
    "SolveTimeoutError",
    "SolverConfig",
    "extract_holes",
    "solve",
]

__version__ = "0.1.0"
