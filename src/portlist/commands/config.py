"""Config command - manage portlist settings."""

from dataclasses import asdict

import typer
from rich.table import Table

from ..config import ConfigError, save_settings, update_setting
from .common import console, error, get_settings, info, success, warning


def config(
    show: bool = typer.Option(False, "--show", help="Show current configuration"),
    set_value: str | None = typer.Option(None, "--set", help="Set a value: key=value"),
) -> None:
    """Manage portlist configuration.

    Examples:
        portlist config --show
        portlist config --set polling_interval=2
        portlist config --set sort_column=pid
    """
    settings = get_settings()

    if show:
        table = Table(title="Configuration")
        table.add_column("Key", style="green")
        table.add_column("Value", style="yellow")

        for key, value in asdict(settings).items():
            table.add_row(key, str(value))

        console.print(table)
        return

    if set_value:
        key, sep, value = set_value.partition("=")
        if not sep:
            error("Format should be key=value")
            raise typer.Exit(1)

        try:
            settings = update_setting(settings, key.strip(), value.strip())
        except ConfigError as e:
            error(str(e))
            raise typer.Exit(1)

        path = save_settings(settings)
        success(f"Set {key.strip()} = {value.strip()}")
        info(f"[dim]Saved to {path}[/dim]")
        return

    warning("Use --show or --set")
