"""Tests for enricher module."""

from portlist.enricher import display_command, merge_entries
from portlist.models import PortEntry, ProcessDescriptor, Protocol, RawPortRecord
from portlist.parsers import parse_lsof_listeners


def test_merge_end_to_end_example():
    """Test merging one lsof line with directory and process info."""
    output = (
        "COMMAND PID USER FD TYPE DEVICE SIZE/OFF NODE NAME\n"
        "node 12345 user 23u IPv4 ... TCP *:3000 (LISTEN)\n"
    )
    entries = merge_entries(
        parse_lsof_listeners(output),
        {12345: "/srv/app"},
        {12345: ProcessDescriptor(command="node server.js", parent_pid=1)},
        {},
    )

    assert entries == [
        PortEntry(
            pid=12345,
            port=3000,
            command="node server.js",
            directory="/srv/app",
            protocol=Protocol.TCP,
            parent_pid=1,
            parent_command="",
        )
    ]


def test_merge_deduplicates_by_pid_and_port():
    """Test that IPv4 and IPv6 bindings of one listener merge into one entry."""
    records = [
        RawPortRecord(pid=1, port=3000, command="node"),
        RawPortRecord(pid=2, port=5432, command="postgres"),
        RawPortRecord(pid=1, port=3000, command="node"),
        RawPortRecord(pid=1, port=3001, command="node"),
    ]

    entries = merge_entries(records)

    assert [(e.pid, e.port) for e in entries] == [(1, 3000), (2, 5432), (1, 3001)]


def test_merge_defaults_without_metadata():
    """Test defaults when no metadata could be resolved."""
    entries = merge_entries([RawPortRecord(pid=7, port=8080, command="java")])

    assert entries[0].command == "java"
    assert entries[0].directory == "Unknown"
    assert entries[0].parent_pid == 0
    assert entries[0].parent_command == ""


def test_merge_resolves_parent_display_command():
    """Test that parent commands are reduced to the executable name."""
    records = [RawPortRecord(pid=10, port=3000, command="node")]
    processes = {10: ProcessDescriptor(command="node index.js", parent_pid=20)}
    parents = {20: "/usr/local/bin/npm run dev"}

    entries = merge_entries(records, {}, processes, parents)

    assert entries[0].parent_pid == 20
    assert entries[0].parent_command == "npm"


def test_merge_unresolved_parent_is_empty():
    """Test that a parent missing from the parent map yields an empty command."""
    records = [RawPortRecord(pid=10, port=3000, command="node")]
    processes = {10: ProcessDescriptor(command="node index.js", parent_pid=20)}

    entries = merge_entries(records, {}, processes, {99: "/bin/zsh"})

    assert entries[0].parent_pid == 20
    assert entries[0].parent_command == ""


def test_display_command():
    """Test reducing command lines to executable names."""
    assert display_command("/usr/local/bin/node server.js") == "node"
    assert display_command("-zsh") == "-zsh"
    assert display_command('"C:\\Program Files\\nodejs\\node.exe" app.js') == "node.exe"
    assert display_command("C:\\Windows\\explorer.exe") == "explorer.exe"
    assert display_command("   ") == ""
