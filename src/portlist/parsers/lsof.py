"""Parsers for lsof output (macOS)."""

import re

from ..models import Protocol, RawPortRecord
from .address import parse_port

# NAME column of a listening socket: "TCP *:3000 (LISTEN)"
_LISTEN_RE = re.compile(r"\b(TCP|UDP)\s+(\S+)\s+\(LISTEN\)\s*$")


def parse_lsof_listeners(output: str) -> list[RawPortRecord]:
    """Parse `lsof -iTCP -sTCP:LISTEN -n -P +c 0` output.

    Example:
        COMMAND     PID   USER   FD   TYPE             DEVICE SIZE/OFF NODE NAME
        node      12345   user   23u  IPv4 0x1234567890123456      0t0  TCP *:3000 (LISTEN)

    With `+c 0` the COMMAND column is not truncated and may contain spaces,
    so the PID is located as the first purely numeric token.

    Args:
        output: Raw lsof output, header included

    Returns:
        One record per LISTEN line, in output order
    """
    records: list[RawPortRecord] = []

    for line in output.strip().splitlines()[1:]:  # Skip header
        record = _parse_listener_line(line)
        if record:
            records.append(record)

    return records


def _parse_listener_line(line: str) -> RawPortRecord | None:
    match = _LISTEN_RE.search(line)
    if not match:
        return None

    port = parse_port(match.group(2))
    if port is None:
        return None

    parts = line.split()
    pid_index = _first_numeric(parts)
    if pid_index is None or pid_index == 0:
        return None

    return RawPortRecord(
        pid=int(parts[pid_index]),
        port=port,
        command=" ".join(parts[:pid_index]),
        protocol=Protocol(match.group(1)),
    )


def parse_lsof_cwd(output: str) -> dict[int, str]:
    """Parse `lsof -d cwd -a -p <pids>` output.

    Example:
        COMMAND   PID   USER   FD   TYPE DEVICE SIZE/OFF     NODE NAME
        node    12345   user  cwd    DIR    1,5      512 12345678 /Users/test/my project

    The path is everything from the first token starting with "/" after the
    DIR column, so paths containing spaces are kept whole.

    Args:
        output: Raw lsof output, header included

    Returns:
        Mapping of PID to working directory
    """
    directories: dict[int, str] = {}

    for line in output.strip().splitlines()[1:]:  # Skip header
        parts = line.split()

        pid_index = _first_numeric(parts)
        if pid_index is None or "cwd" not in parts:
            continue

        try:
            dir_index = parts.index("DIR", parts.index("cwd"))
        except ValueError:
            continue

        path_index = next(
            (i for i in range(dir_index + 1, len(parts)) if parts[i].startswith("/")),
            None,
        )
        if path_index is None:
            continue

        directories[int(parts[pid_index])] = " ".join(parts[path_index:])

    return directories


def _first_numeric(parts: list[str]) -> int | None:
    """Index of the first purely numeric token."""
    for i, part in enumerate(parts):
        if part.isdecimal():
            return i
    return None
