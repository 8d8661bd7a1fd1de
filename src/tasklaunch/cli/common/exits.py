"""Exit handling utilities for the CLI."""

from typing import NoReturn

import typer

from tasklaunch.cli.common.output import out


def ok_exit(msg: str | None = None) -> NoReturn:
    """Exit successfully with an optional informational message."""
    if msg:
        out.info(msg)
    raise typer.Exit(0)


def die(msg: str, code: int = 1) -> NoReturn:
    """Exit with an error message and optional exit code."""
    out.error(msg)
    raise typer.Exit(code)


def exit_from_exc(exc: Exception, *, message: str, code: int = 1) -> NoReturn:
    """
    Print an error message and exit, chaining the original exception.

    Used where the cause should stay visible in tracebacks and logs.
    """
    out.error(message)
    raise typer.Exit(code) from exc
