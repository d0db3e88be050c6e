"""Watch command - live view of listening ports."""

import time
from datetime import datetime

import typer
from rich.console import Group, RenderableType
from rich.live import Live
from rich.table import Table
from rich.text import Text

from ..config import Settings
from ..models import PortEntry, ScanResult
from ..polling import PollingManager
from ..views import filter_entries, sort_entries
from .common import build_tables, console, error, get_scanner, get_settings


class WatchView:
    """Latest scan entries plus the last scan error, rendered for Rich Live.

    The polling manager only reports successful scans, so failures are
    recorded here by wrapping the scan function.
    """

    def __init__(self, settings: Settings, filter_text: str = "") -> None:
        self.settings = settings
        self.filter_text = filter_text
        self.entries: list[PortEntry] | None = None  # None until the first success
        self.last_error: str | None = None

    def record(self, result: ScanResult) -> None:
        """Remember a failed scan. Successful results are ignored."""
        if not result.ok:
            self.last_error = f"Last scan error ({datetime.now():%H:%M:%S}): {result.error}"

    def update(self, entries: list[PortEntry]) -> None:
        self.entries = entries

    def tables(self) -> list[Table]:
        """Build the tables for the latest entries.

        The last scan error, if any, is the caption of the last table.
        """
        matching = sort_entries(
            filter_entries(self.entries or [], self.filter_text),
            self.settings.sort_column,
            self.settings.sort_direction,
        )
        tables = build_tables(matching, self.settings.group_by if matching else "none")
        if self.last_error:
            tables[-1].caption = self.last_error
            tables[-1].caption_style = "red"
        return tables

    def render(self) -> RenderableType:
        if self.entries is None:
            if self.last_error:
                return Text(self.last_error, style="red")
            return Text("Scanning...", style="dim")
        return Group(*self.tables())


def watch(
    interval: float | None = typer.Option(
        None, "--interval", "-i", help="Seconds between scans"
    ),
    filter_text: str = typer.Option("", "--filter", "-f", help="Only show matching entries"),
) -> None:
    """Continuously show listening ports. Press Ctrl-C to stop.

    Examples:
        portlist watch
        portlist watch --interval 2 --filter node
    """
    settings = get_settings()
    interval = interval or settings.polling_interval
    if interval <= 0:
        error("Interval must be greater than 0")
        raise typer.Exit(1)

    scanner = get_scanner()
    view = WatchView(settings, filter_text)

    with Live(view.render(), console=console, auto_refresh=False) as live:

        def get_port_list() -> ScanResult:
            result = scanner.get_port_list()
            if not result.ok:
                view.record(result)
                live.update(view.render(), refresh=True)
            return result

        def show(entries: list[PortEntry]) -> None:
            view.update(entries)
            live.update(view.render(), refresh=True)

        polling = PollingManager(get_port_list, interval)
        unsubscribe = polling.on_update(show)
        polling.start()
        try:
            while polling.is_running:
                time.sleep(0.5)
        except KeyboardInterrupt:
            pass
        finally:
            polling.stop()
            unsubscribe()
