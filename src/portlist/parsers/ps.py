"""Parsers for ps output (macOS/Linux)."""

from ..models import ProcessDescriptor


def parse_process_info(output: str) -> dict[int, ProcessDescriptor]:
    """Parse `ps -o pid=,ppid=,command=` output.

    Example:
        12345  1234 /usr/bin/node /path/to/app/server.js --port 3000

    Args:
        output: Raw ps output without header

    Returns:
        Mapping of PID to full command line and parent PID
    """
    processes: dict[int, ProcessDescriptor] = {}

    for line in output.splitlines():
        parts = line.split()
        if len(parts) < 3:
            continue

        try:
            pid = int(parts[0])
            ppid = int(parts[1])
        except ValueError:
            continue

        processes[pid] = ProcessDescriptor(command=" ".join(parts[2:]), parent_pid=ppid)

    return processes


def parse_parent_commands(output: str) -> dict[int, str]:
    """Parse `ps -o pid=,command=` output.

    Args:
        output: Raw ps output without header

    Returns:
        Mapping of PID to full command line
    """
    commands: dict[int, str] = {}

    for line in output.splitlines():
        parts = line.split(maxsplit=1)
        if len(parts) < 2:
            continue

        try:
            pid = int(parts[0])
        except ValueError:
            continue

        command = parts[1].strip()
        if command:
            commands[pid] = command

    return commands
