"""Logging setup for the CLI.

Log records are rendered by rich on stderr, next to the rest of the CLI
output, and never on stdout.
"""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from tasklaunch.cli.common.output import console

_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def level_for_verbosity(verbosity: int) -> int:
    """Map a -v count to a logging level (0 warning, 1 info, 2+ debug)."""
    return _LEVELS[max(0, min(verbosity, len(_LEVELS) - 1))]


def configure_logging(verbosity: int = 0) -> None:
    """Route the `tasklaunch` loggers to a RichHandler on stderr."""
    handler = RichHandler(console=console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("tasklaunch")
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level_for_verbosity(verbosity))
    logger.propagate = False
