#!/usr/bin/env python3
"""compatlint CLI: validate a browser compatibility data repository.

Usage:
  compatlint [--] [files ...]   lint the given files/directories (default: all categories)
  compatlint -v | --version
  compatlint -h | --help | -?

The repository root is the current directory unless COMPATLINT_ROOT is set.
Setting CI disables the progress spinner.

Exit codes:
- 0: no file-level or repository-level check failed
- 1: at least one check failed
- 3: usage/internal error
"""

from __future__ import annotations

import argparse
import sys

import compatlint
from compatlint.config import LintConfig
from compatlint.runner.lint import run_lint


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="compatlint",
        description="Lint browser compatibility data files",
        add_help=False,
    )
    ap.add_argument("-h", "--help", "-?", action="help", help="Show this help message and exit")
    ap.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {compatlint.__version__}",
        help="Show the version and exit",
    )
    ap.add_argument("files", nargs="*", help="The files to lint")
    return ap


def main(argv: list[str] | None = None) -> int:
    try:
        args = _build_parser().parse_args(argv)
        config = LintConfig.from_env()
        report = run_lint(args.files or None, config)
        return report.exit_code
    except SystemExit as e:
        if isinstance(e.code, int):
            return e.code
        return 3
    except Exception as e:
        print(f"[compatlint] ERROR: {e}", file=sys.stderr)
        return 3


if __name__ == "__main__":
    raise SystemExit(main())
