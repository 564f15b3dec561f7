import unittest
from collections import Counter
from unittest.mock import patch

from fillin import FillinGrid, FillinSolver, NoSolution, SolverConfig, solve
from fillin.core.constants import Engine
from fillin.core.exceptions import SolveTimeoutError, ValidationError
from fillin.engine.holes import extract_holes
from fillin.engine.validator import SolutionValidator, ValidationResult


HAT_PUZZLE = ["#h#", "___", "#_#"]

# Solution: cat / rope across, car / top down.
ROPE_PUZZLE = ["___#", "_#_#", "____", "####"]
ROPE_WORDS = ["cat", "rope", "car", "top"]
ROPE_SOLUTION = [
    ["c", "a", "t", "#"],
    ["a", "#", "o", "#"],
    ["r", "o", "p", "e"],
    ["#", "#", "#", "#"],
]

# Taking the first hole for "xye" leads to a dead end two levels down.
DETOUR_PUZZLE = ["___", "##_", "___"]
DETOUR_WORDS = ["xye", "abc", "edc"]
DETOUR_SOLUTION = [["x", "y", "e"], ["#", "#", "d"], ["a", "b", "c"]]


def _hole_words(grid: FillinGrid) -> Counter:
    return Counter("".join(grid.read(hole)) for hole in extract_holes(grid))


class SolveScenarioTests(unittest.TestCase):
    def test_fixed_letter_scenario(self) -> None:
        solved = solve(HAT_PUZZLE, ["hat", "bag"])
        self.assertEqual(solved.to_rows(), [["#", "h", "#"], ["b", "a", "g"], ["#", "t", "#"]])

    def test_word_order_does_not_matter(self) -> None:
        solved = solve(HAT_PUZZLE, ["bag", "hat"])
        self.assertEqual(solved.to_rows(), [["#", "h", "#"], ["b", "a", "g"], ["#", "t", "#"]])

    def test_grid_is_solved_in_place(self) -> None:
        grid = FillinGrid.from_rows(ROPE_PUZZLE)
        solved = solve(grid, ROPE_WORDS)
        self.assertIs(solved, grid)
        self.assertEqual(grid.to_rows(), ROPE_SOLUTION)

    def test_degenerate_grid_with_no_words(self) -> None:
        grid = FillinGrid.from_rows(["##", "##"])
        solved = solve(grid, [])
        self.assertEqual(solved.to_rows(), [["#", "#"], ["#", "#"]])
        self.assertEqual(solve([], []).to_rows(), [])

    def test_duplicate_words_each_fill_a_hole(self) -> None:
        solved = solve(["__", "##", "__"], ["ab", "ab"])
        self.assertEqual(solved.to_rows(), [["a", "b"], ["#", "#"], ["a", "b"]])

    def test_first_fill_follows_hole_order(self) -> None:
        # Both fills are valid; the bottom row is tried first.
        solved = solve(["__", "##", "__"], ["ab", "cd"])
        self.assertEqual(solved.to_rows(), [["c", "d"], ["#", "#"], ["a", "b"]])

    def test_fully_prefilled_hole_still_consumes_a_word(self) -> None:
        solved = solve(["ab", "#_"], ["ab", "bc"])
        self.assertEqual(solved.to_rows(), [["a", "b"], ["#", "c"]])
        with self.assertRaises(NoSolution):
            solve(["ab", "#_"], ["bc"])


class SolvePropertyTests(unittest.TestCase):
    def test_crossings_agree_and_words_are_conserved(self) -> None:
        grid = FillinGrid.from_rows(ROPE_PUZZLE)
        solve(grid, ROPE_WORDS)
        self.assertEqual(_hole_words(grid), Counter(ROPE_WORDS))
        holes = extract_holes(grid)
        for first in holes:
            for second in holes:
                for index, coord in enumerate(first.cells):
                    if coord in second.cells:
                        self.assertEqual(
                            grid.read(first)[index],
                            grid.read(second)[second.cells.index(coord)],
                        )

    def test_backtracks_out_of_dead_end(self) -> None:
        result = FillinSolver().solve(DETOUR_PUZZLE, DETOUR_WORDS)
        self.assertEqual(result.grid.to_rows(), DETOUR_SOLUTION)
        self.assertEqual(result.backtracks, 2)
        self.assertEqual(result.assignments, 5)
        self.assertEqual(
            sorted((hole.id, word) for hole, word in result.placements),
            [("AC_0_0", "xye"), ("AC_2_0", "abc"), ("DN_0_2", "edc")],
        )


class NoSolutionTests(unittest.TestCase):
    def test_no_word_matches_fixed_letter(self) -> None:
        with self.assertRaises(NoSolution):
            solve(HAT_PUZZLE, ["cat", "dog"])

    def test_grid_unchanged_after_failure(self) -> None:
        grid = FillinGrid.from_rows(ROPE_PUZZLE)
        original = grid.to_rows()
        with self.assertRaises(NoSolution):
            solve(grid, ["cat", "rope", "car", "tin"])
        self.assertEqual(grid.to_rows(), original)

    def test_too_many_words(self) -> None:
        with self.assertRaises(NoSolution):
            solve(HAT_PUZZLE, ["hat", "bag", "cab"])

    def test_too_few_words(self) -> None:
        with self.assertRaises(NoSolution):
            solve(HAT_PUZZLE, ["hat"])

    def test_words_for_empty_grid(self) -> None:
        with self.assertRaises(NoSolution):
            solve(["##"], ["ab"])

    def test_incompatible_lengths(self) -> None:
        with self.assertRaises(NoSolution):
            solve(HAT_PUZZLE, ["hat", "bagel"])


class SolverConfigTests(unittest.TestCase):
    def test_engine_accepts_plain_string(self) -> None:
        result = FillinSolver(SolverConfig(engine="backtracking")).solve(HAT_PUZZLE, ["hat", "bag"])
        self.assertEqual(result.engine, Engine.BACKTRACKING)

    def test_unknown_engine_rejected(self) -> None:
        with self.assertRaises(ValueError):
            FillinSolver(SolverConfig(engine="annealing")).solve(HAT_PUZZLE, ["hat", "bag"])

    @patch("fillin.engine.solver.time")
    def test_timeout_unwinds_every_assignment(self, mock_time) -> None:
        # start, then one deadline check per step; the third step is late.
        mock_time.monotonic.side_effect = [0.0, 0.0, 0.0, 10.0, 10.0, 10.0]
        grid = FillinGrid.from_rows(DETOUR_PUZZLE)
        original = grid.to_rows()
        with self.assertRaises(SolveTimeoutError):
            FillinSolver(SolverConfig(timeout_seconds=1.0)).solve(grid, DETOUR_WORDS)
        self.assertEqual(grid.to_rows(), original)

    @patch.object(SolutionValidator, "validate")
    def test_rejected_solution_is_rolled_back(self, mock_validate) -> None:
        mock_validate.return_value = ValidationResult(ok=False, messages=["rejected"])
        grid = FillinGrid.from_rows(HAT_PUZZLE)
        original = grid.to_rows()
        with self.assertRaises(ValidationError):
            FillinSolver().solve(grid, ["hat", "bag"])
        self.assertEqual(grid.to_rows(), original)

    def test_generous_timeout_solves(self) -> None:
        result = FillinSolver(SolverConfig(timeout_seconds=30.0)).solve(ROPE_PUZZLE, ROPE_WORDS)
        self.assertEqual(result.grid.to_rows(), ROPE_SOLUTION)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
