"""Custom exception hierarchy for the fill-in solver."""


class FillinError(Exception):
    """Base exception for solver failures."""


class NoSolution(FillinError):
    """Raised when the search exhausts every branch without filling the grid."""


class MalformedGridError(FillinError):
    """Raised when a grid is not rectangular or holds an invalid cell symbol."""


class SolveTimeoutError(FillinError):
    """Raised when the configured search deadline elapses."""


class PuzzleFormatError(FillinError):
    """Raised when a puzzle or word file cannot be parsed."""


class ValidationError(FillinError):
    """Raised when a solved grid fails the integrity checks."""
