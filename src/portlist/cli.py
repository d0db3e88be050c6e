"""Typer CLI for Portlist - Main entry point."""

import typer

from . import __version__
from .commands import config, kill, list_cmd, watch

app = typer.Typer(
    name="portlist",
    help="List listening ports and the processes behind them",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"portlist version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """List listening ports and the processes behind them."""
    pass

# Register all commands
app.command(name="list")(list_cmd)
app.command()(kill)
app.command()(watch)
app.command()(config)


def main() -> None:
    """Main entry point."""
    app()
