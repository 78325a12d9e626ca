"""Console output that respects quiet and verbose modes."""

from __future__ import annotations

import sys


class Console:
    """Status and diagnostic output on stderr.

    Insults are written to stdout by the commands themselves; failures are
    reported once, by click, when a command raises ClickException.
    """

    def __init__(self, quiet: bool = False, verbose: bool = False):
        self._quiet = quiet
        self._verbose = verbose

    def info(self, message: str, file=None) -> None:
        if self._quiet:
            return
        print(message, file=file if file is not None else sys.stderr)

    def debug(self, message: str, file=None) -> None:
        if not self._verbose:
            return
        print(message, file=file if file is not None else sys.stderr)
