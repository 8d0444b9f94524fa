"""Simple levelled printing for the code generator."""

from __future__ import annotations

import sys


class Logger:
    """Prints progress to stdout and warnings to stderr.

    A level of -1 is quiet (warnings only), 0 is normal and 1 is verbose.
    """

    def __init__(self, level: int = 0) -> None:
        self.level = level

    def info(self, message: str, *args: object) -> None:
        """Print ``message`` (``%``-formatted with ``args``) at normal verbosity."""
        if self.level >= 0:
            sys.stdout.write(message % args if args else message)

    def warn(self, message: str, *args: object) -> None:
        """Print ``message`` (``%``-formatted with ``args``) to stderr as a warning."""
        if self.level >= -1:
            text = message % args if args else message
            sys.stderr.write("WARN: " + text)