"""Scan pipeline shared by the platform scanners."""

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import TypeVar

from ..console import debug
from ..constants import SCAN_TIMEOUT
from ..enricher import merge_entries
from ..executor import CommandError, CommandTimeoutError, Executor, run_command
from ..models import ProcessDescriptor, RawPortRecord, ScanErrorKind, ScanResult

T = TypeVar("T")


class PlatformScanner(ABC):
    """List listening ports and resolve their owning processes.

    A scan runs four steps, each a single batched command:

    1. List listening sockets (mandatory)
    2. Resolve working directories of the distinct PIDs
    3. Resolve full command lines and parent PIDs
    4. Resolve parent command lines

    Only step 1 can fail the scan. Later steps are best effort: a failure
    leaves the corresponding fields at their "unknown" defaults.
    """

    name = "platform"

    def __init__(self, executor: Executor = run_command, timeout: float = SCAN_TIMEOUT) -> None:
        """Initialize scanner.

        Args:
            executor: Function running a command and returning its output
            timeout: Timeout in seconds for every command of the scan
        """
        self.executor = executor
        self.timeout = timeout

    def scan(self) -> ScanResult:
        """Scan the system for listening ports.

        Returns:
            ScanResult with entries, or with a COMMAND_FAILED/TIMEOUT error
        """
        try:
            records = self.list_listeners()
        except CommandTimeoutError as e:
            return ScanResult.failure(ScanErrorKind.TIMEOUT, str(e))
        except CommandError as e:
            return ScanResult.failure(ScanErrorKind.COMMAND_FAILED, str(e))

        if not records:
            return ScanResult(entries=[])

        pids = list(dict.fromkeys(record.pid for record in records))

        directories = self._best_effort("working directories", self.resolve_directories, pids)
        processes = self._best_effort("process info", self.resolve_processes, pids)

        parent_pids = list(
            dict.fromkeys(p.parent_pid for p in processes.values() if p.parent_pid > 0)
        )
        parent_commands: dict[int, str] = {}
        if parent_pids:
            parent_commands = self._best_effort(
                "parent commands", self.resolve_parent_commands, parent_pids
            )

        return ScanResult(entries=merge_entries(records, directories, processes, parent_commands))

    @abstractmethod
    def list_listeners(self) -> list[RawPortRecord]:
        """List listening sockets.

        Raises:
            CommandError: If the listing command fails or times out
        """

    def resolve_directories(self, pids: list[int]) -> dict[int, str]:
        """Map PIDs to working directories. Platforms without support return {}."""
        return {}

    @abstractmethod
    def resolve_processes(self, pids: list[int]) -> dict[int, ProcessDescriptor]:
        """Map PIDs to full command line and parent PID."""

    @abstractmethod
    def resolve_parent_commands(self, pids: list[int]) -> dict[int, str]:
        """Map parent PIDs to full command lines."""

    def run(self, *args: str) -> str:
        """Run a command with the scan timeout."""
        return self.executor(list(args), self.timeout)

    def _best_effort(
        self, step: str, resolve: Callable[[list[int]], dict[int, T]], pids: Sequence[int]
    ) -> dict[int, T]:
        try:
            return resolve(list(pids))
        except CommandError as e:
            debug(f"{self.name}: could not resolve {step}: {e}")
            return {}


def pid_list(pids: Sequence[int]) -> str:
    """Format PIDs as a comma-separated list."""
    return ",".join(str(pid) for pid in pids)
