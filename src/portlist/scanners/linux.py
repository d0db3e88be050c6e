"""Linux scanner based on ss (or netstat), /proc and ps."""

import os
from pathlib import Path

from ..console import debug
from ..constants import SCAN_TIMEOUT
from ..executor import CommandError, CommandTimeoutError, Executor, run_command
from ..models import ProcessDescriptor, RawPortRecord
from ..parsers import parse_linux_listeners, parse_parent_commands, parse_process_info
from .base import PlatformScanner, pid_list


class LinuxScanner(PlatformScanner):
    """Scan listening ports on Linux."""

    name = "linux"

    def __init__(
        self,
        executor: Executor = run_command,
        timeout: float = SCAN_TIMEOUT,
        proc_root: Path = Path("/proc"),
    ) -> None:
        """Initialize scanner.

        Args:
            executor: Function running a command and returning its output
            timeout: Timeout in seconds for every command of the scan
            proc_root: Mount point of procfs
        """
        super().__init__(executor, timeout)
        self.proc_root = proc_root

    def list_listeners(self) -> list[RawPortRecord]:
        """List listening sockets with ss, falling back to netstat.

        A timeout of ss is not retried with netstat.
        """
        try:
            output = self.run("ss", "-tlnp")
        except CommandTimeoutError:
            raise
        except CommandError as e:
            debug(f"linux: ss failed ({e}), trying netstat")
            output = self.run("netstat", "-tlnp")
        return parse_linux_listeners(output)

    def resolve_directories(self, pids: list[int]) -> dict[int, str]:
        """Read /proc/<pid>/cwd for each PID.

        Processes owned by other users or gone since the listing are skipped.
        """
        directories: dict[int, str] = {}
        for pid in pids:
            try:
                directories[pid] = os.readlink(self.proc_root / str(pid) / "cwd")
            except OSError:
                continue
        return directories

    def resolve_processes(self, pids: list[int]) -> dict[int, ProcessDescriptor]:
        output = self.run("ps", "-p", pid_list(pids), "-o", "pid=,ppid=,args=")
        return parse_process_info(output)

    def resolve_parent_commands(self, pids: list[int]) -> dict[int, str]:
        output = self.run("ps", "-p", pid_list(pids), "-o", "pid=,args=")
        return parse_parent_commands(output)
