"""List command - show listening ports and their processes."""

import json

import typer

from ..config import GROUP_MODES, SORT_COLUMNS
from ..views import filter_entries, sort_entries
from .common import build_tables, console, error, get_scanner, get_settings, warning


def list_cmd(
    filter_text: str = typer.Option("", "--filter", "-f", help="Only show matching entries"),
    sort: str | None = typer.Option(
        None, "--sort", "-s", help=f"Sort column: {', '.join(SORT_COLUMNS)}"
    ),
    desc: bool | None = typer.Option(
        None, "--desc/--asc", help="Sort direction (default from config)"
    ),
    group: str | None = typer.Option(
        None, "--group", "-g", help=f"Group by: {', '.join(GROUP_MODES)}"
    ),
    as_json: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List TCP ports in LISTEN state with their owning processes.

    Examples:
        portlist list
        portlist list --filter node --sort pid
        portlist list --group parent
        portlist list --json
    """
    settings = get_settings()
    column = sort or settings.sort_column
    direction = settings.sort_direction if desc is None else ("desc" if desc else "asc")
    group_by = group or settings.group_by

    if column not in SORT_COLUMNS:
        error(f"Unknown sort column '{column}'")
        raise typer.Exit(1)
    if group_by not in GROUP_MODES:
        error(f"Unknown grouping '{group_by}'")
        raise typer.Exit(1)

    result = get_scanner().get_port_list()
    if not result.ok:
        error(str(result.error))
        raise typer.Exit(1)

    entries = sort_entries(filter_entries(result.entries, filter_text), column, direction)

    if as_json:
        print(json.dumps([e.to_dict() for e in entries], indent=2))
        return

    if not entries:
        warning("No listening ports found")
        return

    for table in build_tables(entries, group_by):
        console.print(table)
