"""Tests for port scanner facade."""

import pytest

from portlist.port_scanner import PortScanner
from portlist.scanners import DarwinScanner, LinuxScanner, WindowsScanner


@pytest.mark.parametrize(
    "system, scanner_type",
    [
        ("Darwin", DarwinScanner),
        ("Linux", LinuxScanner),
        ("Windows", WindowsScanner),
        ("FreeBSD", DarwinScanner),
    ],
)
def test_scanner_for(system, scanner_type):
    """Test dispatch by OS family."""
    assert isinstance(PortScanner().scanner_for(system), scanner_type)


def test_get_port_list_uses_running_system(fake_executor):
    """Test that the OS family is read on every call."""
    systems = iter(["Windows", "Darwin"])
    fake_executor.responses = {
        "netstat -ano": "",
        "lsof -iTCP -sTCP:LISTEN -n -P +c 0": "",
    }
    scanner = PortScanner(executor=fake_executor, system=lambda: next(systems))

    first = scanner.get_port_list()
    second = scanner.get_port_list()

    assert first.ok and first.entries == []
    assert second.ok and second.entries == []
    assert fake_executor.commands == ["netstat -ano", "lsof -iTCP -sTCP:LISTEN -n -P +c 0"]


def test_get_port_list_passes_timeout(fake_executor):
    """Test that the configured timeout reaches the executor."""
    fake_executor.responses = {"ss -tlnp": ""}
    scanner = PortScanner(executor=fake_executor, system=lambda: "Linux", timeout=2.5)

    scanner.get_port_list()

    assert fake_executor.timeouts == [2.5]
