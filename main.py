"""CLI entrypoint for the fill-in puzzle solver."""

from __future__ import annotations

import sys

from fillin.cli import main


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
