"""Data model for listening ports and process termination results."""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any


class Protocol(str, Enum):
    """Transport protocol of a listening socket."""

    TCP = "TCP"
    UDP = "UDP"


@dataclass(frozen=True)
class RawPortRecord:
    """A listening socket as reported by a platform tool, before enrichment."""

    pid: int
    port: int
    command: str  # Possibly truncated process name
    protocol: Protocol = Protocol.TCP


@dataclass(frozen=True)
class ProcessDescriptor:
    """Full command line and parent of a process."""

    command: str
    parent_pid: int = 0  # 0 when unknown


@dataclass(frozen=True)
class PortEntry:
    """A listening port resolved to its owning process."""

    pid: int
    port: int
    command: str
    directory: str
    protocol: Protocol
    parent_pid: int
    parent_command: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        data = asdict(self)
        data["protocol"] = self.protocol.value
        return data


class ScanErrorKind(str, Enum):
    """Reasons a port scan can fail."""

    COMMAND_FAILED = "COMMAND_FAILED"
    PARSE_ERROR = "PARSE_ERROR"
    TIMEOUT = "TIMEOUT"


@dataclass(frozen=True)
class ScanError:
    """Error raised by the socket listing step of a scan."""

    kind: ScanErrorKind
    message: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


@dataclass
class ScanResult:
    """Result of a port scan."""

    entries: list[PortEntry] = field(default_factory=list)
    error: ScanError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, kind: ScanErrorKind, message: str) -> "ScanResult":
        return cls(error=ScanError(kind=kind, message=message))


class KillErrorKind(str, Enum):
    """Reasons a process termination can fail."""

    NOT_FOUND = "NOT_FOUND"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class KillError:
    """Error raised while terminating a process.

    NOT_FOUND and PERMISSION_DENIED carry the pid, UNKNOWN carries a message.
    """

    kind: KillErrorKind
    pid: int | None = None
    message: str = ""

    @classmethod
    def not_found(cls, pid: int) -> "KillError":
        return cls(kind=KillErrorKind.NOT_FOUND, pid=pid)

    @classmethod
    def permission_denied(cls, pid: int) -> "KillError":
        return cls(kind=KillErrorKind.PERMISSION_DENIED, pid=pid)

    @classmethod
    def unknown(cls, message: str) -> "KillError":
        return cls(kind=KillErrorKind.UNKNOWN, message=message)

    def __str__(self) -> str:
        if self.kind is KillErrorKind.UNKNOWN:
            return self.message
        return f"{self.kind.value}: {self.pid}"


@dataclass
class KillResult:
    """Result of a process termination."""

    pid: int
    error: KillError | None = None
    escalated: bool = False  # Forceful signal was sent

    @property
    def ok(self) -> bool:
        return self.error is None
