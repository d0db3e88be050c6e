"""Common utilities for CLI commands."""

from rich.table import Table

from ..config import Settings, load_settings
from ..console import console, error, info, success, warning
from ..models import PortEntry
from ..port_scanner import PortScanner
from ..process_manager import ProcessManager
from ..views import group_by_directory, group_by_parent

# Re-export console utilities
__all__ = [
    "console",
    "info",
    "success",
    "warning",
    "error",
    "get_settings",
    "get_scanner",
    "get_process_manager",
    "build_tables",
]


def get_settings() -> Settings:
    """Get user settings."""
    return load_settings()


def get_scanner() -> PortScanner:
    """Get port scanner instance."""
    return PortScanner()


def get_process_manager(graceful_timeout: float) -> ProcessManager:
    """Get process manager instance."""
    return ProcessManager(graceful_timeout=graceful_timeout)


def build_tables(entries: list[PortEntry], group_by: str = "none") -> list[Table]:
    """Render entries as one table, or one table per group.

    Args:
        entries: Entries in display order
        group_by: directory, parent or none

    Returns:
        Rich tables to print
    """
    if group_by == "directory":
        groups = group_by_directory(entries)
    elif group_by == "parent":
        groups = group_by_parent(entries)
    else:
        return [_build_table("Listening Ports", entries)]

    return [_build_table(title, group) for title, group in groups.items()]


def _build_table(title: str, entries: list[PortEntry]) -> Table:
    table = Table(title=title, title_justify="left")
    table.add_column("Port", style="yellow", justify="right")
    table.add_column("PID", style="cyan", justify="right")
    table.add_column("Command", style="green", overflow="fold")
    table.add_column("Directory", style="blue", overflow="fold")
    table.add_column("Parent", style="magenta")

    for entry in entries:
        parent = f"{entry.parent_command} ({entry.parent_pid})" if entry.parent_command else "-"
        table.add_row(str(entry.port), str(entry.pid), entry.command, entry.directory, parent)

    return table
