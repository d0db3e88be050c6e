"""Platform-specific port scanners."""

from .base import PlatformScanner
from .darwin import DarwinScanner
from .linux import LinuxScanner
from .windows import WindowsScanner

__all__ = ["PlatformScanner", "DarwinScanner", "LinuxScanner", "WindowsScanner"]
