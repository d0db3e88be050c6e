"""Process termination with graceful-then-forceful escalation."""

import os
import platform
import signal
import time
from collections.abc import Callable
from enum import Enum

from .console import debug
from .constants import (
    KILL_FORCE_TIMEOUT,
    KILL_GRACEFUL_TIMEOUT,
    KILL_POLL_INTERVAL,
    TASKKILL_TIMEOUT,
)
from .executor import CommandError, CommandTimeoutError, Executor, run_command
from .models import KillError, KillResult

# (pid, signal) -> None, raising OSError like os.kill
KillFunction = Callable[[int, int], None]

# Failure messages printed by taskkill (English, Japanese)
_TASKKILL_NOT_FOUND = ("not found", "見つかりません")
_TASKKILL_ACCESS_DENIED = ("Access is denied", "アクセスが拒否されました")
_TASKKILL_NOT_FOUND_STATUS = 128


class KillState(Enum):
    """States of the Unix termination protocol."""

    RUNNING = "running"
    WAITING_GRACEFUL = "waiting_graceful"
    ESCALATE = "escalate"
    DONE = "done"


class ProcessManager:
    """Terminate processes by PID."""

    def __init__(
        self,
        kill: KillFunction = os.kill,
        executor: Executor = run_command,
        system: Callable[[], str] = platform.system,
        graceful_timeout: float = KILL_GRACEFUL_TIMEOUT,
        force_timeout: float = KILL_FORCE_TIMEOUT,
        poll_interval: float = KILL_POLL_INTERVAL,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize process manager.

        Args:
            kill: Signal sender; signal 0 probes whether the process exists
            executor: Command runner used for taskkill on Windows
            system: Function returning the OS family
            graceful_timeout: Seconds to wait after SIGTERM before SIGKILL
            force_timeout: Seconds to wait after SIGKILL
            poll_interval: Seconds between existence probes
            sleep: Sleep function
            clock: Monotonic clock
        """
        self.kill = kill
        self.executor = executor
        self.system = system
        self.graceful_timeout = graceful_timeout
        self.force_timeout = force_timeout
        self.poll_interval = poll_interval
        self.sleep = sleep
        self.clock = clock

    def kill_process(self, pid: int) -> KillResult:
        """Terminate a process.

        Args:
            pid: Process ID

        Returns:
            KillResult, with a NOT_FOUND, PERMISSION_DENIED or UNKNOWN error
            on failure
        """
        # 0 and negative values address process groups
        if pid <= 0:
            return KillResult(pid=pid, error=KillError.unknown(f"Invalid pid: {pid}"))
        if self.system() == "Windows":
            return self._kill_windows(pid)
        return self._kill_unix(pid)

    def _kill_unix(self, pid: int) -> KillResult:
        """Send SIGTERM, wait, then SIGKILL if the process is still alive.

        Once SIGKILL has been sent the operation succeeds even if the
        process lingers (e.g. as a zombie).
        """
        state = KillState.RUNNING
        escalated = False

        while state is not KillState.DONE:
            try:
                if state is KillState.RUNNING:
                    self.kill(pid, signal.SIGTERM)
                    state = KillState.WAITING_GRACEFUL

                elif state is KillState.WAITING_GRACEFUL:
                    exited = self._wait_for_exit(pid, self.graceful_timeout)
                    state = KillState.DONE if exited else KillState.ESCALATE

                elif state is KillState.ESCALATE:
                    debug(f"pid {pid} still running after SIGTERM, sending SIGKILL")
                    escalated = True
                    self._force_kill(pid)
                    state = KillState.DONE

            except OSError as e:
                return KillResult(pid=pid, error=_kill_error(pid, e), escalated=escalated)

        return KillResult(pid=pid, escalated=escalated)

    def _force_kill(self, pid: int) -> None:
        # The process may exit between the last probe and SIGKILL
        try:
            self.kill(pid, signal.SIGKILL)
            self._wait_for_exit(pid, self.force_timeout)
        except OSError:
            pass

    def _wait_for_exit(self, pid: int, timeout: float) -> bool:
        """Probe the process until it is gone or the timeout elapses.

        Returns:
            True if the process exited, False on timeout

        Raises:
            OSError: If the probe fails for a reason other than "no such process"
        """
        deadline = self.clock() + timeout
        while self.clock() < deadline:
            try:
                self.kill(pid, 0)
            except ProcessLookupError:
                return True
            self.sleep(self.poll_interval)
        return False

    def _kill_windows(self, pid: int) -> KillResult:
        """Force-terminate with taskkill."""
        try:
            self.executor(["taskkill", "/F", "/PID", str(pid)], TASKKILL_TIMEOUT)
        except CommandTimeoutError as e:
            return KillResult(pid=pid, error=KillError.unknown(str(e)))
        except CommandError as e:
            output = e.stderr or e.stdout or str(e)
            if e.returncode == _TASKKILL_NOT_FOUND_STATUS or any(
                text in output for text in _TASKKILL_NOT_FOUND
            ):
                return KillResult(pid=pid, error=KillError.not_found(pid))
            if any(text in output for text in _TASKKILL_ACCESS_DENIED):
                return KillResult(pid=pid, error=KillError.permission_denied(pid))
            return KillResult(pid=pid, error=KillError.unknown(output.strip()))

        return KillResult(pid=pid, escalated=True)


def _kill_error(pid: int, error: OSError) -> KillError:
    """Map an os.kill failure to a KillError."""
    if isinstance(error, ProcessLookupError):
        return KillError.not_found(pid)
    if isinstance(error, PermissionError):
        return KillError.permission_denied(pid)
    return KillError.unknown(str(error))
