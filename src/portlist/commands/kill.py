"""Kill command - terminate the process owning a port."""

import typer

from ..models import KillErrorKind
from .common import error, get_process_manager, get_scanner, get_settings, info, success, warning


def kill(
    pid: int | None = typer.Argument(None, min=1, help="Process ID to terminate"),
    port: int | None = typer.Option(
        None,
        "-p",
        "--port",
        min=1,
        max=65535,
        help="Terminate the processes listening on this port",
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
    timeout: float | None = typer.Option(
        None, "--timeout", help="Seconds to wait after SIGTERM before SIGKILL"
    ),
) -> None:
    """Terminate a process, gracefully first and forcefully after a timeout.

    Examples:
        portlist kill 12345
        portlist kill --port 3000
        portlist kill --port 3000 --force
    """
    if (pid is None) == (port is None):
        error("Specify either a PID or --port")
        raise typer.Exit(1)

    if port is not None:
        result = get_scanner().get_port_list()
        if not result.ok:
            error(str(result.error))
            raise typer.Exit(1)
        targets = {e.pid: e.command for e in result.entries if e.port == port}
        if not targets:
            warning(f"No process is listening on port {port}")
            return
    else:
        targets = {pid: ""}

    if not force:
        for target, command in targets.items():
            info(f"  - {target} [dim]{command}[/dim]")
        if not typer.confirm(f"Terminate {len(targets)} process(es)?"):
            warning("Cancelled")
            return

    manager = get_process_manager(timeout or get_settings().kill_timeout)
    failed = False

    for target in targets:
        outcome = manager.kill_process(target)
        if outcome.ok:
            note = " (forced)" if outcome.escalated else ""
            success(f"Terminated {target}{note}")
        elif outcome.error.kind is KillErrorKind.NOT_FOUND:
            warning(f"Process {target} is already gone")
        elif outcome.error.kind is KillErrorKind.PERMISSION_DENIED:
            error(f"Permission denied to terminate {target}")
            failed = True
        else:
            error(f"Could not terminate {target}: {outcome.error.message}")
            failed = True

    if failed:
        raise typer.Exit(1)
