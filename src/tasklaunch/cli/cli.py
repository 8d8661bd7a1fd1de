"""CLI application for the task launch request transform."""

import typer

from tasklaunch.cli.commands.transform import app as transform_app
from tasklaunch.cli.common.logs import configure_logging
from tasklaunch.cli.common.options import VerboseOpt

app = typer.Typer(
    help="tasklaunch - turn messages into task launch requests",
    no_args_is_help=True,
)

app.add_typer(
    transform_app,
    name="transform",
    help="Build launch requests from messages (single or streamed).",
)


@app.callback()
def _main(verbose: int = VerboseOpt):
    """Configure logging for every command."""
    configure_logging(verbose)


if __name__ == "__main__":
    app()
