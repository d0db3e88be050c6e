"""Port scanner facade dispatching to the platform scanner."""

import platform
from collections.abc import Callable

from .constants import SCAN_TIMEOUT
from .executor import Executor, run_command
from .models import ScanResult
from .scanners import DarwinScanner, LinuxScanner, PlatformScanner, WindowsScanner


class PortScanner:
    """Scan the current host for listening ports."""

    def __init__(
        self,
        executor: Executor = run_command,
        system: Callable[[], str] = platform.system,
        timeout: float = SCAN_TIMEOUT,
    ) -> None:
        """Initialize scanner.

        Args:
            executor: Function running a command and returning its output
            system: Function returning the OS family ("Darwin", "Linux", "Windows")
            timeout: Timeout in seconds for every scan command
        """
        self.executor = executor
        self.system = system
        self.timeout = timeout

    def get_port_list(self) -> ScanResult:
        """Scan listening ports using the scanner for the running OS.

        No caching and no retry: every call runs a fresh scan.

        Returns:
            ScanResult with port entries or the scan error
        """
        return self.scanner_for(self.system()).scan()

    def scanner_for(self, system_name: str) -> PlatformScanner:
        """Get the platform scanner for an OS family.

        Unrecognized systems use lsof, like macOS.
        """
        if system_name == "Windows":
            return WindowsScanner(self.executor, self.timeout)
        if system_name == "Linux":
            return LinuxScanner(self.executor, self.timeout)
        return DarwinScanner(self.executor, self.timeout)
