"""Shared constants for Portlist."""

APP_NAME = "portlist"

# Timeouts in seconds
SCAN_TIMEOUT = 5.0
KILL_GRACEFUL_TIMEOUT = 3.0
KILL_FORCE_TIMEOUT = 1.0
KILL_POLL_INTERVAL = 0.1
TASKKILL_TIMEOUT = 5.0

DEFAULT_POLLING_INTERVAL = 5.0
POLLING_STOP_TIMEOUT = 1.0  # Seconds stop() waits for an in-flight scan

# Directory placeholder when a process cwd cannot be resolved
UNKNOWN_DIRECTORY = "Unknown"
