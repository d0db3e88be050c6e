"""Parsers for netstat, wmic and tasklist output (Windows)."""

import csv

from ..models import ProcessDescriptor, Protocol, RawPortRecord
from .address import parse_port


def parse_netstat_ano(output: str) -> list[RawPortRecord]:
    """Parse `netstat -ano` output, keeping LISTENING sockets only.

    Example:
          Proto  Local Address          Foreign Address        State           PID
          TCP    0.0.0.0:3000           0.0.0.0:0              LISTENING       1234
          TCP    [::]:3000              [::]:0                 LISTENING       1234

    netstat only knows the PID, so the command is a "PID:<pid>" placeholder
    until process info replaces it.

    Args:
        output: Raw netstat output

    Returns:
        Records in output order
    """
    records: list[RawPortRecord] = []

    for line in output.strip().splitlines():
        parts = line.split()
        if len(parts) < 5:
            continue

        protocol = parts[0].upper()
        if protocol not in ("TCP", "UDP") or parts[3] != "LISTENING":
            continue
        if not parts[4].isdecimal():
            continue

        port = parse_port(parts[1])
        if port is None:
            continue

        pid = int(parts[4])
        records.append(
            RawPortRecord(pid=pid, port=port, command=f"PID:{pid}", protocol=Protocol(protocol))
        )

    return records


def parse_wmic_process_info(output: str) -> dict[int, ProcessDescriptor]:
    """Parse `wmic process ... get ProcessId,ParentProcessId,CommandLine /format:csv`.

    wmic sorts columns alphabetically and does not quote values:

        Node,CommandLine,ParentProcessId,ProcessId
        HOST,node server.js --origins=a,b,5678,1234

    The numeric columns are split from the right so commas inside the
    command line survive.

    Args:
        output: Raw wmic output

    Returns:
        Mapping of PID to full command line and parent PID
    """
    processes: dict[int, ProcessDescriptor] = {}

    for line in output.splitlines():
        line = line.strip()
        if line.count(",") < 3:
            continue

        _, rest = line.split(",", 1)
        command, ppid_str, pid_str = rest.rsplit(",", 2)
        if not pid_str.isdecimal() or not command:
            continue

        ppid = int(ppid_str) if ppid_str.isdecimal() else 0
        processes[int(pid_str)] = ProcessDescriptor(command=command, parent_pid=ppid)

    return processes


def parse_wmic_parent_commands(output: str) -> dict[int, str]:
    """Parse `wmic process ... get ProcessId,CommandLine /format:csv`.

    Rows have the form "Node,CommandLine,ProcessId".

    Args:
        output: Raw wmic output

    Returns:
        Mapping of PID to full command line
    """
    commands: dict[int, str] = {}

    for line in output.splitlines():
        line = line.strip()
        if line.count(",") < 2:
            continue

        _, rest = line.split(",", 1)
        command, pid_str = rest.rsplit(",", 1)
        if pid_str.isdecimal() and command:
            commands[int(pid_str)] = command

    return commands


def parse_tasklist(output: str, pids: set[int]) -> dict[int, ProcessDescriptor]:
    """Parse `tasklist /fo csv /nh` output.

    Used when wmic is unavailable. tasklist only reports the image name and
    has no parent information, so parent PIDs are 0.

    Example:
        "node.exe","1234","Console","1","45,312 K"

    Args:
        output: Raw tasklist output
        pids: PIDs to keep

    Returns:
        Mapping of PID to image name
    """
    processes: dict[int, ProcessDescriptor] = {}

    for row in csv.reader(line for line in output.splitlines() if line.strip()):
        if len(row) < 2 or not row[1].isdecimal():
            continue

        pid = int(row[1])
        if pid in pids and row[0]:
            processes[pid] = ProcessDescriptor(command=row[0], parent_pid=0)

    return processes
