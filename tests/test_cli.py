"""Tests for the Typer CLI."""

import importlib
import json

import platformdirs
import pytest
from typer.testing import CliRunner

from portlist import __version__
from portlist.cli import app
from portlist.commands.watch import WatchView
from portlist.config import Settings, load_settings, save_settings
from portlist.polling import PollingManager
from portlist.models import (
    KillError,
    KillResult,
    PortEntry,
    Protocol,
    ScanErrorKind,
    ScanResult,
)

runner = CliRunner()

list_module = importlib.import_module("portlist.commands.list")
kill_module = importlib.import_module("portlist.commands.kill")
watch_module = importlib.import_module("portlist.commands.watch")

SCAN_FAILED = ScanResult.failure(ScanErrorKind.COMMAND_FAILED, "lsof: not found")

ENTRIES = [
    PortEntry(1234, 3000, "node server.js", "/srv/web", Protocol.TCP, 1, "launchd"),
    PortEntry(5678, 5432, "postgres -D /data", "/srv/db", Protocol.TCP, 0, ""),
]


class FakeScanner:
    def __init__(self, result: ScanResult) -> None:
        self.result = result

    def get_port_list(self) -> ScanResult:
        return self.result


class FakeProcessManager:
    def __init__(self, results: dict[int, KillResult] | None = None) -> None:
        self.results = results or {}
        self.killed: list[int] = []

    def kill_process(self, pid: int) -> KillResult:
        self.killed.append(pid)
        return self.results.get(pid, KillResult(pid=pid))


@pytest.fixture(autouse=True)
def config_dir(temp_dir, monkeypatch):
    """Keep settings inside the temporary directory."""
    monkeypatch.setattr(platformdirs, "user_config_dir", lambda *args: str(temp_dir))
    return temp_dir


@pytest.fixture
def scan(monkeypatch):
    """Install a scanner returning ENTRIES in the list and kill commands."""

    def install(result: ScanResult = ScanResult(entries=ENTRIES)) -> None:
        for module in (list_module, kill_module):
            monkeypatch.setattr(module, "get_scanner", lambda: FakeScanner(result))

    install()
    return install


@pytest.fixture
def process_manager(monkeypatch):
    """Install a fake process manager."""
    manager = FakeProcessManager()
    monkeypatch.setattr(kill_module, "get_process_manager", lambda timeout: manager)
    return manager


def test_version():
    """Test --version."""
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert f"portlist version {__version__}" in result.output


def test_list_table(scan):
    """Test the table output."""
    result = runner.invoke(app, ["list", "--group", "none"])

    assert result.exit_code == 0
    assert "3000" in result.output
    assert "5432" in result.output


def test_list_json_filtered(scan):
    """Test JSON output with a filter."""
    result = runner.invoke(app, ["list", "--json", "--filter", "postgres"])

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data == [
        {
            "pid": 5678,
            "port": 5432,
            "command": "postgres -D /data",
            "directory": "/srv/db",
            "protocol": "TCP",
            "parent_pid": 0,
            "parent_command": "",
        }
    ]


def test_list_scan_error(scan):
    """Test exit status when the scan fails."""
    scan(ScanResult.failure(ScanErrorKind.COMMAND_FAILED, "lsof: not found"))

    result = runner.invoke(app, ["list"])

    assert result.exit_code == 1
    assert "lsof: not found" in result.output


def test_list_invalid_sort(scan):
    """Test rejection of unknown sort columns."""
    result = runner.invoke(app, ["list", "--sort", "memory"])

    assert result.exit_code == 1


def test_kill_pid(scan, process_manager):
    """Test killing by PID without confirmation."""
    result = runner.invoke(app, ["kill", "1234", "--force"])

    assert result.exit_code == 0
    assert process_manager.killed == [1234]
    assert "Terminated 1234" in result.output


def test_kill_by_port(scan, process_manager):
    """Test that only processes on the requested port are killed."""
    result = runner.invoke(app, ["kill", "--port", "3000", "--force"])

    assert result.exit_code == 0
    assert process_manager.killed == [1234]


def test_kill_port_without_listener(scan, process_manager):
    """Test a port nobody listens on."""
    result = runner.invoke(app, ["kill", "--port", "9999", "--force"])

    assert result.exit_code == 0
    assert process_manager.killed == []
    assert "No process is listening on port 9999" in result.output


def test_kill_not_found_is_benign(scan, process_manager):
    """Test that an already exited process is not a failure."""
    process_manager.results[1234] = KillResult(pid=1234, error=KillError.not_found(1234))

    result = runner.invoke(app, ["kill", "1234", "--force"])

    assert result.exit_code == 0
    assert "already gone" in result.output


def test_kill_permission_denied(scan, process_manager):
    """Test exit status on permission errors."""
    process_manager.results[1] = KillResult(pid=1, error=KillError.permission_denied(1))

    result = runner.invoke(app, ["kill", "1", "--force"])

    assert result.exit_code == 1
    assert "Permission denied" in result.output


def test_kill_cancelled(scan, process_manager):
    """Test declining the confirmation prompt."""
    result = runner.invoke(app, ["kill", "1234"], input="n\n")

    assert result.exit_code == 0
    assert process_manager.killed == []
    assert "Cancelled" in result.output


def test_kill_requires_target(scan, process_manager):
    """Test that either a PID or --port is required."""
    assert runner.invoke(app, ["kill"]).exit_code == 1
    assert runner.invoke(app, ["kill", "1", "--port", "3000"]).exit_code == 1


def test_config_set_and_show(config_dir):
    """Test persisting a setting and showing it."""
    result = runner.invoke(app, ["config", "--set", "polling_interval=2"])

    assert result.exit_code == 0
    assert load_settings(config_dir / "config.yaml") == Settings(polling_interval=2.0)

    result = runner.invoke(app, ["config", "--show"])

    assert result.exit_code == 0
    assert "polling_interval" in result.output


def test_config_set_invalid(config_dir):
    """Test rejection of invalid settings."""
    result = runner.invoke(app, ["config", "--set", "sort_column=memory"])

    assert result.exit_code == 1
    assert not (config_dir / "config.yaml").exists()


@pytest.mark.parametrize("pid", ["0", "-1"])
def test_kill_rejects_group_pids(scan, process_manager, pid):
    """Test that PIDs addressing process groups are refused before any kill."""
    result = runner.invoke(app, ["kill", "--force", "--", pid])

    assert result.exit_code == 2
    assert process_manager.killed == []


def test_kill_rejects_out_of_range_port(scan, process_manager):
    """Test port range validation."""
    result = runner.invoke(app, ["kill", "--port", "70000", "--force"])

    assert result.exit_code == 2
    assert process_manager.killed == []


def test_list_direction_flags_override_config(scan, config_dir):
    """Test that --asc and --desc override the configured direction."""
    save_settings(Settings(sort_direction="desc"), config_dir / "config.yaml")

    def ports(*args):
        result = runner.invoke(app, ["list", "--json", *args])
        assert result.exit_code == 0
        return [entry["port"] for entry in json.loads(result.output)]

    assert ports() == [5432, 3000]
    assert ports("--asc") == [3000, 5432]
    assert ports("--desc") == [5432, 3000]


def test_watch_view_keeps_last_error_as_caption():
    """Test that a scan error stays visible as the caption after later updates."""
    view = WatchView(Settings(group_by="none"))

    view.record(SCAN_FAILED)
    assert "lsof: not found" in view.render().plain

    view.update(ENTRIES)
    view.record(ScanResult(entries=ENTRIES))
    tables = view.tables()

    assert len(tables) == 1
    assert tables[0].row_count == 2
    assert "lsof: not found" in tables[0].caption


def test_watch_view_filters_and_groups():
    """Test filtering and per-directory tables."""
    view = WatchView(Settings(group_by="directory"), filter_text="node")
    view.update(ENTRIES)

    tables = view.tables()

    assert [table.title for table in tables] == ["/srv/web"]
    assert tables[0].caption is None


class SequenceScanner:
    def __init__(self, *results: ScanResult) -> None:
        self.results = list(results)
        self.calls = 0

    def get_port_list(self) -> ScanResult:
        self.calls += 1
        return self.results.pop(0)


class InlinePolling(PollingManager):
    """Polling manager running two scans synchronously in start()."""

    is_running = False

    def start(self) -> None:
        self.scan_and_notify()
        self.scan_and_notify()


def test_watch_failure_then_success(monkeypatch):
    """Test the watch command with one failed scan followed by a success."""
    scanner = SequenceScanner(SCAN_FAILED, ScanResult(entries=ENTRIES))
    monkeypatch.setattr(watch_module, "get_scanner", lambda: scanner)
    monkeypatch.setattr(watch_module, "PollingManager", InlinePolling)

    result = runner.invoke(app, ["watch", "--interval", "1"])

    assert result.exit_code == 0
    assert scanner.calls == 2


def test_watch_rejects_negative_interval(monkeypatch):
    """Test interval validation."""
    monkeypatch.setattr(watch_module, "get_scanner", lambda: SequenceScanner())

    result = runner.invoke(app, ["watch", "--interval=-1"])

    assert result.exit_code == 1
