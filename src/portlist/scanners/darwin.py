"""macOS scanner based on lsof and ps."""

from ..models import ProcessDescriptor, RawPortRecord
from ..parsers import (
    parse_lsof_cwd,
    parse_lsof_listeners,
    parse_parent_commands,
    parse_process_info,
)
from .base import PlatformScanner, pid_list


class DarwinScanner(PlatformScanner):
    """Scan listening ports on macOS."""

    name = "darwin"

    def list_listeners(self) -> list[RawPortRecord]:
        output = self.run("lsof", "-iTCP", "-sTCP:LISTEN", "-n", "-P", "+c", "0")
        return parse_lsof_listeners(output)

    def resolve_directories(self, pids: list[int]) -> dict[int, str]:
        output = self.run("lsof", "-d", "cwd", "-a", "-p", pid_list(pids))
        return parse_lsof_cwd(output)

    def resolve_processes(self, pids: list[int]) -> dict[int, ProcessDescriptor]:
        output = self.run("ps", "-p", pid_list(pids), "-o", "pid=,ppid=,command=")
        return parse_process_info(output)

    def resolve_parent_commands(self, pids: list[int]) -> dict[int, str]:
        output = self.run("ps", "-p", pid_list(pids), "-o", "pid=,command=")
        return parse_parent_commands(output)
