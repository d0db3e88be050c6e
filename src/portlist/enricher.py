"""Merge raw port records with per-process metadata."""

import re
from collections.abc import Iterable, Mapping

from .constants import UNKNOWN_DIRECTORY
from .models import PortEntry, ProcessDescriptor, RawPortRecord


def merge_entries(
    records: Iterable[RawPortRecord],
    directories: Mapping[int, str] | None = None,
    processes: Mapping[int, ProcessDescriptor] | None = None,
    parent_commands: Mapping[int, str] | None = None,
) -> list[PortEntry]:
    """Build the final port entries for a scan.

    Records are deduplicated by (pid, port), keeping the first occurrence, so
    a process bound to both IPv4 and IPv6 on one port yields one entry.
    Missing metadata is not an error: the directory falls back to "Unknown",
    the command to the listing tool's value and the parent to PID 0 with an
    empty command.

    Args:
        records: Raw records in tool output order
        directories: PID → working directory
        processes: PID → full command line and parent PID
        parent_commands: Parent PID → full command line

    Returns:
        Port entries in order of first occurrence
    """
    directories = directories or {}
    processes = processes or {}
    parent_commands = parent_commands or {}

    seen: set[tuple[int, int]] = set()
    entries: list[PortEntry] = []

    for record in records:
        key = (record.pid, record.port)
        if key in seen:
            continue
        seen.add(key)

        process = processes.get(record.pid)
        parent_pid = process.parent_pid if process else 0
        parent_command = parent_commands.get(parent_pid, "") if parent_pid else ""

        entries.append(
            PortEntry(
                pid=record.pid,
                port=record.port,
                command=process.command if process and process.command else record.command,
                directory=directories.get(record.pid) or UNKNOWN_DIRECTORY,
                protocol=record.protocol,
                parent_pid=parent_pid,
                parent_command=display_command(parent_command),
            )
        )

    return entries


def display_command(command_line: str) -> str:
    """Reduce a command line to the name of its executable.

    Examples:
        /usr/local/bin/node server.js -> node
        "C:\\Program Files\\nodejs\\node.exe" app.js -> node.exe
        -zsh -> -zsh
    """
    command_line = command_line.strip()
    if not command_line:
        return ""

    if command_line.startswith('"'):
        executable = command_line[1:].split('"', 1)[0]
    else:
        executable = command_line.split()[0]

    return re.split(r"[\\/]", executable)[-1] or executable
