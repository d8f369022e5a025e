#!/usr/bin/env python3
"""Run a set of quick health checks to confirm the file store still works."""

from __future__ import annotations

import argparse
import subprocess
import sys
from pathlib import Path

# Resolve the repository root so the commands always run from a predictable place.
ROOT = Path(__file__).resolve().parents[1]


def run_step(command: list[str], description: str) -> None:
    """Execute a shell command and stream its output."""

    print(f"\n==> {description}")
    result = subprocess.run(command, cwd=ROOT)
    if result.returncode != 0:
        raise SystemExit(result.returncode)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Run syntax checks and the pytest suite before shipping a change."
    )
    parser.add_argument(
        "--skip-tests",
        action="store_true",
        help="Skip running pytest (useful when you only want the compile check).",
    )
    args = parser.parse_args(argv)

    run_step(
        [sys.executable, "-m", "compileall", "-q", "file_service.py", "filestore", "examples", "tests"],
        "Checking for syntax errors",
    )

    if not args.skip_tests:
        # The HTTP tests boot the app in memory, no running server needed.
        run_step([sys.executable, "-m", "pytest"], "Running pytest suite")

    print("\nAll health checks passed!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
