"""Windows scanner based on netstat, wmic and tasklist."""

from ..console import debug
from ..executor import CommandError
from ..models import ProcessDescriptor, RawPortRecord
from ..parsers import (
    parse_netstat_ano,
    parse_tasklist,
    parse_wmic_parent_commands,
    parse_wmic_process_info,
)
from .base import PlatformScanner


class WindowsScanner(PlatformScanner):
    """Scan listening ports on Windows.

    Windows offers no practical way to read another process's working
    directory, so directories are always "Unknown".
    """

    name = "windows"

    def list_listeners(self) -> list[RawPortRecord]:
        return parse_netstat_ano(self.run("netstat", "-ano"))

    def resolve_processes(self, pids: list[int]) -> dict[int, ProcessDescriptor]:
        """Query wmic, falling back to tasklist where wmic is not installed."""
        try:
            output = self.run(
                "wmic",
                "process",
                "where",
                _where_clause(pids),
                "get",
                "ProcessId,ParentProcessId,CommandLine",
                "/format:csv",
            )
            return parse_wmic_process_info(output)
        except CommandError as e:
            debug(f"windows: wmic failed ({e}), trying tasklist")

        return parse_tasklist(self.run("tasklist", "/fo", "csv", "/nh"), set(pids))

    def resolve_parent_commands(self, pids: list[int]) -> dict[int, str]:
        output = self.run(
            "wmic",
            "process",
            "where",
            _where_clause(pids),
            "get",
            "ProcessId,CommandLine",
            "/format:csv",
        )
        return parse_wmic_parent_commands(output)


def _where_clause(pids: list[int]) -> str:
    """Build a WQL filter: ProcessId=1 or ProcessId=2."""
    return " or ".join(f"ProcessId={pid}" for pid in pids)
