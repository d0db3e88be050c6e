"""Parsers for the text output of platform tools.

All parsers are pure functions: they never run commands and never raise on
malformed input. Lines that cannot be understood are skipped.
"""

from .address import parse_port
from .linux import parse_linux_listeners, parse_netstat_tlnp_line, parse_ss_line
from .lsof import parse_lsof_cwd, parse_lsof_listeners
from .ps import parse_parent_commands, parse_process_info
from .windows import (
    parse_netstat_ano,
    parse_tasklist,
    parse_wmic_parent_commands,
    parse_wmic_process_info,
)

__all__ = [
    "parse_port",
    "parse_linux_listeners",
    "parse_netstat_tlnp_line",
    "parse_ss_line",
    "parse_lsof_cwd",
    "parse_lsof_listeners",
    "parse_parent_commands",
    "parse_process_info",
    "parse_netstat_ano",
    "parse_tasklist",
    "parse_wmic_parent_commands",
    "parse_wmic_process_info",
]
