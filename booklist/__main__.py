"""
Module entrypoint for the booklist CLI.

This file exists so that `python -m booklist ...` works when the console-script
wrapper is not installed.
"""

from __future__ import annotations

import sys

from booklist.cli import main


def _run() -> None:
    """
    Execute the booklist command line interface.

    Raises
    ------
    SystemExit
        Always, carrying the CLI exit code.
    """
    sys.exit(main())


if __name__ == "__main__":
    _run()
