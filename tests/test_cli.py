import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from fillin.cli import EXIT_BAD_INPUT, EXIT_NO_SOLUTION, EXIT_SOLVED, main


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmpdir.cleanup)
        self.root = Path(self._tmpdir.name)
        self.puzzle = self.root / "puzzle.txt"
        self.words = self.root / "words.txt"
        self.puzzle.write_text("#h#\n___\n#_#\n", encoding="utf-8")
        self.words.write_text("hat\nbag\n", encoding="utf-8")

    def _run(self, *args: str):
        stdout, stderr = io.StringIO(), io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            code = main([str(self.puzzle), str(self.words), *args])
        return code, stdout.getvalue(), stderr.getvalue()

    def test_prints_solution(self) -> None:
        code, out, _ = self._run()
        self.assertEqual(code, EXIT_SOLVED)
        self.assertEqual(out, "#h#\nbag\n#t#\n")

    def test_writes_output_file(self) -> None:
        target = self.root / "solution.txt"
        code, out, _ = self._run("--output", str(target))
        self.assertEqual(code, EXIT_SOLVED)
        self.assertEqual(out, "")
        self.assertEqual(target.read_text(encoding="utf-8"), "#h#\nbag\n#t#\n")

    def test_json_payload(self) -> None:
        code, out, _ = self._run("--json")
        self.assertEqual(code, EXIT_SOLVED)
        payload = json.loads(out)
        self.assertEqual(payload["solution"], ["#h#", "bag", "#t#"])
        self.assertEqual(payload["engine"], "backtracking")
        self.assertEqual(
            sorted((p["id"], p["word"]) for p in payload["placements"]),
            [("AC_1_0", "bag"), ("DN_0_1", "hat")],
        )

    def test_cpsat_engine(self) -> None:
        code, out, _ = self._run("--engine", "cpsat")
        self.assertEqual(code, EXIT_SOLVED)
        self.assertEqual(out, "#h#\nbag\n#t#\n")

    def test_pretty_goes_to_stderr(self) -> None:
        code, out, err = self._run("--pretty")
        self.assertEqual(code, EXIT_SOLVED)
        self.assertEqual(out, "#h#\nbag\n#t#\n")
        self.assertIn("Puzzle:", err)
        self.assertIn("Backtracks:", err)

    def test_no_solution_exit_code(self) -> None:
        self.words.write_text("cat\ndog\n", encoding="utf-8")
        code, out, err = self._run()
        self.assertEqual(code, EXIT_NO_SOLUTION)
        self.assertEqual(out, "")
        self.assertIn("No solution", err)

    def test_missing_input_exit_code(self) -> None:
        self.puzzle.unlink()
        code, out, _ = self._run()
        self.assertEqual(code, EXIT_BAD_INPUT)
        self.assertEqual(out, "")

    def test_ragged_puzzle_exit_code(self) -> None:
        self.puzzle.write_text("#h#\n__\n", encoding="utf-8")
        code, _, _ = self._run()
        self.assertEqual(code, EXIT_BAD_INPUT)

    def test_non_positive_timeout_is_usage_error(self) -> None:
        with self.assertRaises(SystemExit):
            self._run("--timeout", "0")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
