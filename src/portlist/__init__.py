"""Portlist - Listening ports and the processes behind them."""

__version__ = "0.1.0"

from .config import ConfigError, Settings, load_settings, save_settings
from .enricher import merge_entries
from .executor import CommandError, CommandTimeoutError, run_command
from .models import (
    KillError,
    KillErrorKind,
    KillResult,
    PortEntry,
    ProcessDescriptor,
    Protocol,
    RawPortRecord,
    ScanError,
    ScanErrorKind,
    ScanResult,
)
from .polling import PollingManager
from .port_scanner import PortScanner
from .process_manager import ProcessManager

__all__ = [
    "__version__",
    "ConfigError",
    "Settings",
    "load_settings",
    "save_settings",
    "merge_entries",
    "CommandError",
    "CommandTimeoutError",
    "run_command",
    "KillError",
    "KillErrorKind",
    "KillResult",
    "PortEntry",
    "ProcessDescriptor",
    "Protocol",
    "RawPortRecord",
    "ScanError",
    "ScanErrorKind",
    "ScanResult",
    "PollingManager",
    "PortScanner",
    "ProcessManager",
]
