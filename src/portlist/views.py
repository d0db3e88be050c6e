"""Filtering, sorting and grouping of port entries for display."""

from collections.abc import Iterable

from .models import PortEntry

UNKNOWN_PARENT = "Unknown"

_SORT_KEYS = {
    "port": lambda e: e.port,
    "pid": lambda e: e.pid,
    "command": lambda e: e.command.casefold(),
    "directory": lambda e: e.directory.casefold(),
    "parent": lambda e: e.parent_command.casefold(),
}


def filter_entries(entries: Iterable[PortEntry], text: str) -> list[PortEntry]:
    """Keep entries matching a search text.

    Matches case-insensitively against port, PID, command, directory and
    parent command. Blank text keeps everything.
    """
    entries = list(entries)
    search = text.strip().lower()
    if not search:
        return entries

    return [
        e
        for e in entries
        if search in str(e.port)
        or search in str(e.pid)
        or search in e.command.lower()
        or search in e.directory.lower()
        or search in e.parent_command.lower()
    ]


def sort_entries(
    entries: Iterable[PortEntry], column: str = "port", direction: str = "asc"
) -> list[PortEntry]:
    """Sort entries by column.

    Args:
        entries: Entries to sort
        column: One of port, pid, command, directory, parent
        direction: asc or desc

    Returns:
        New sorted list; ties keep their original order

    Raises:
        ValueError: If column or direction is unknown
    """
    if column not in _SORT_KEYS:
        raise ValueError(f"Unknown sort column: {column}")
    if direction not in ("asc", "desc"):
        raise ValueError(f"Unknown sort direction: {direction}")

    return sorted(entries, key=_SORT_KEYS[column], reverse=direction == "desc")


def group_by_directory(entries: Iterable[PortEntry]) -> dict[str, list[PortEntry]]:
    """Group entries by working directory, in order of first appearance."""
    groups: dict[str, list[PortEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.directory, []).append(entry)
    return groups


def group_by_parent(entries: Iterable[PortEntry]) -> dict[str, list[PortEntry]]:
    """Group entries by parent command, in order of first appearance."""
    groups: dict[str, list[PortEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.parent_command or UNKNOWN_PARENT, []).append(entry)
    return groups
