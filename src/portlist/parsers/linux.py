"""Parsers for ss and netstat output (Linux)."""

import re

from ..models import RawPortRecord
from .address import parse_port

# Process column of ss: users:(("nginx",pid=1201,fd=6),("nginx",pid=1200,fd=6))
_SS_USER_RE = re.compile(r'\("([^"]*)",pid=(\d+)')


def parse_linux_listeners(output: str) -> list[RawPortRecord]:
    """Parse `ss -tlnp` or `netstat -tlnp` output.

    Both formats are accepted line by line, so the same parser serves the
    netstat fallback:

        LISTEN 0  511  0.0.0.0:3000  0.0.0.0:*  users:(("node",pid=1234,fd=19))
        tcp    0  0    0.0.0.0:3000  0.0.0.0:*  LISTEN  1234/node

    Header lines and sockets in other states are skipped, as are listeners
    whose owning process is not visible to the current user.

    Args:
        output: Raw tool output

    Returns:
        Records in output order
    """
    records: list[RawPortRecord] = []

    for line in output.strip().splitlines():
        parts = line.split()
        if not parts:
            continue

        if parts[0] == "LISTEN":
            records.extend(parse_ss_line(parts))
        elif parts[0] in ("tcp", "tcp6"):
            record = parse_netstat_tlnp_line(parts)
            if record:
                records.append(record)

    return records


def parse_ss_line(parts: list[str]) -> list[RawPortRecord]:
    """Parse the tokens of one ss line.

    Columns: State Recv-Q Send-Q Local-Address:Port Peer-Address:Port Process

    Returns:
        One record per process sharing the socket
    """
    if len(parts) < 6 or parts[0] != "LISTEN":
        return []

    port = parse_port(parts[3])
    if port is None:
        return []

    process_column = " ".join(parts[5:])
    records: list[RawPortRecord] = []
    seen: set[int] = set()
    for match in _SS_USER_RE.finditer(process_column):
        pid = int(match.group(2))
        if pid in seen:
            continue
        seen.add(pid)
        records.append(RawPortRecord(pid=pid, port=port, command=match.group(1)))

    return records


def parse_netstat_tlnp_line(parts: list[str]) -> RawPortRecord | None:
    """Parse the tokens of one netstat line.

    Columns: Proto Recv-Q Send-Q Local-Address Foreign-Address State PID/Program
    """
    if len(parts) < 7 or parts[5] != "LISTEN":
        return None

    port = parse_port(parts[3])
    if port is None:
        return None

    # Program name may contain spaces: "800/sshd: /usr/sbin"
    pid_str, _, command = " ".join(parts[6:]).partition("/")
    if not pid_str.isdecimal():
        return None

    return RawPortRecord(pid=int(pid_str), port=port, command=command)
