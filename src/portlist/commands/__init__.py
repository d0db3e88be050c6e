"""Command modules for portlist CLI."""

from .config import config
from .kill import kill
from .list import list_cmd
from .watch import watch

__all__ = [
    "config",
    "kill",
    "list_cmd",
    "watch",
]
