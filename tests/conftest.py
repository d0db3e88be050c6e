"""Test fixtures and configuration."""

import tempfile
from collections.abc import Sequence
from pathlib import Path

import pytest

from portlist.executor import CommandError


class FakeExecutor:
    """Return canned output for exact command lines and record every call."""

    def __init__(self, responses: dict[str, str | Exception] | None = None) -> None:
        self.responses = responses or {}
        self.calls: list[list[str]] = []
        self.timeouts: list[float] = []

    def __call__(self, args: Sequence[str], timeout: float) -> str:
        self.calls.append(list(args))
        self.timeouts.append(timeout)
        command = " ".join(args)
        response = self.responses.get(command)
        if response is None:
            raise CommandError(f"unexpected command: {command}", returncode=1)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def commands(self) -> list[str]:
        return [" ".join(call) for call in self.calls]


class FakeClock:
    """Monotonic clock advanced only by its sleep function."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def temp_dir():
    """Temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_executor():
    """Executor without canned responses; tests fill in `responses`."""
    return FakeExecutor()


@pytest.fixture
def fake_clock():
    """Fake monotonic clock."""
    return FakeClock()
