"""Timed execution of platform tools."""

import subprocess
from collections.abc import Callable, Sequence

from .constants import SCAN_TIMEOUT

# (args, timeout in seconds) -> stdout
Executor = Callable[[Sequence[str], float], str]


class CommandError(Exception):
    """Raised when a command cannot be run or exits with a non-zero status."""

    def __init__(
        self,
        message: str,
        returncode: int | None = None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class CommandTimeoutError(CommandError):
    """Raised when a command does not finish within its timeout."""


def run_command(args: Sequence[str], timeout: float = SCAN_TIMEOUT) -> str:
    """Run a command and return its standard output.

    The command is executed directly, never through a shell.

    Args:
        args: Program and arguments
        timeout: Seconds to wait before killing the command

    Returns:
        Captured standard output

    Raises:
        CommandTimeoutError: If the command timed out
        CommandError: If the command could not be started or failed
    """
    argv = list(args)
    try:
        result = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise CommandTimeoutError(f"{argv[0]} timed out after {timeout:g}s") from e
    except (OSError, subprocess.SubprocessError) as e:
        raise CommandError(str(e)) from e

    if result.returncode != 0:
        message = result.stderr.strip() or f"{argv[0]} exited with status {result.returncode}"
        raise CommandError(
            message,
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )

    return result.stdout
