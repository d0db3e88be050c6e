"""Periodic port scanning with subscriber fan-out."""

import threading
from collections.abc import Callable

from .console import debug
from .constants import DEFAULT_POLLING_INTERVAL, POLLING_STOP_TIMEOUT
from .models import PortEntry, ScanResult

UpdateCallback = Callable[[list[PortEntry]], None]


class PollingManager:
    """Run a port scan on a timer and notify subscribers of each result.

    Failed scans notify nobody and do not stop the timer. Ticks of one timer
    never overlap. A scan still running when its timer is stopped or re-armed
    by set_interval() notifies nobody.
    """

    def __init__(
        self,
        get_port_list: Callable[[], ScanResult],
        interval: float = DEFAULT_POLLING_INTERVAL,
    ) -> None:
        """Initialize polling manager.

        Args:
            get_port_list: Scan function, usually PortScanner.get_port_list
            interval: Seconds between scans
        """
        _check_interval(interval)
        self._get_port_list = get_port_list
        self._interval = interval
        self._listeners: list[tuple[object, UpdateCallback]] = []
        self._stop_event: threading.Event | None = None
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    @property
    def interval(self) -> float:
        with self._lock:
            return self._interval

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._stop_event is not None

    def start(self) -> None:
        """Scan immediately, then every interval. No-op if already running."""
        with self._lock:
            if self._stop_event is not None:
                return
            self._arm(immediate=True)

    def stop(self) -> None:
        """Stop polling. Safe to call when not running.

        Waits up to POLLING_STOP_TIMEOUT for a running tick to finish, unless
        called from a subscriber. A scan that completes after the stop
        notifies nobody.
        """
        with self._lock:
            if self._stop_event is None:
                return
            self._stop_event.set()
            self._stop_event = None
            thread, self._thread = self._thread, None

        if thread is not None and thread is not threading.current_thread():
            thread.join(POLLING_STOP_TIMEOUT)

    def set_interval(self, interval: float) -> None:
        """Change the interval, restarting the timer right away if running.

        Args:
            interval: Seconds between scans

        Raises:
            ValueError: If interval is not positive
        """
        _check_interval(interval)
        with self._lock:
            self._interval = interval
            if self._stop_event is not None:
                self._stop_event.set()
                self._arm(immediate=False)

    def on_update(self, callback: UpdateCallback) -> Callable[[], None]:
        """Subscribe to scan results.

        Args:
            callback: Called with the entry list after every successful scan

        Returns:
            Function removing this subscription; later calls do nothing
        """
        token = object()
        with self._lock:
            self._listeners.append((token, callback))

        def unsubscribe() -> None:
            with self._lock:
                self._listeners = [item for item in self._listeners if item[0] is not token]

        return unsubscribe

    def scan_and_notify(self) -> ScanResult:
        """Run one scan and notify subscribers if it succeeded.

        Returns:
            The scan result
        """
        result = self._get_port_list()
        self._notify(result)
        return result

    def _notify(self, result: ScanResult, stop_event: threading.Event | None = None) -> None:
        if not result.ok:
            debug(f"polling: scan failed: {result.error}")
            return

        with self._lock:
            # Timer stopped or re-armed while scanning
            if stop_event is not None and stop_event.is_set():
                return
            callbacks = [callback for _, callback in self._listeners]
        for callback in callbacks:
            try:
                callback(result.entries)
            except Exception as e:  # Isolate subscribers
                debug(f"polling: subscriber failed: {e}")

    def _arm(self, immediate: bool) -> None:
        # Caller holds self._lock
        stop_event = threading.Event()
        self._stop_event = stop_event
        self._thread = threading.Thread(
            target=self._run,
            args=(stop_event, self._interval, immediate),
            name="portlist-polling",
            daemon=True,
        )
        self._thread.start()

    def _run(self, stop_event: threading.Event, interval: float, immediate: bool) -> None:
        if immediate and not stop_event.is_set():
            self._tick(stop_event)
        while not stop_event.wait(interval):
            self._tick(stop_event)

    def _tick(self, stop_event: threading.Event) -> None:
        try:
            self._notify(self._get_port_list(), stop_event)
        except Exception as e:  # Keep the timer alive
            debug(f"polling: scan raised: {e}")


def _check_interval(interval: float) -> None:
    if interval <= 0:
        raise ValueError(f"Polling interval must be greater than 0, got {interval}")
