"""Refresh daemon: runs refresh cycles on a fixed interval.

The first cycle runs immediately. A location change wakes the loop for an
immediate cycle and cancels the one in flight. Stopping the daemon ends
all future ticks.

Usage:
    python -m oceanova daemon --location "Bay of Bengal"
    python -m oceanova daemon --interval 120
"""

import logging
import signal
import threading
from datetime import UTC, datetime

from oceanova.models.weather import Location
from oceanova.pipeline.refresh_orchestrator import RefreshOrchestrator, RefreshOutcome

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 600.0  # 10 minutes


class RefreshDaemon:
    """Runs refresh cycles on a background thread until stopped."""

    def __init__(
        self,
        orchestrator: RefreshOrchestrator,
        interval: float = DEFAULT_INTERVAL,
    ):
        self.orchestrator = orchestrator
        self.interval = interval
        self._stop = threading.Event()
        self._wake = threading.Event()
        self._thread: threading.Thread | None = None
        self.total_cycles = 0
        self.total_successes = 0
        self.total_failures = 0
        self.started_at: str | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            raise RuntimeError("Refresh daemon already running")
        self._stop.clear()
        self._wake.clear()
        self.started_at = datetime.now(UTC).isoformat()
        self._thread = threading.Thread(
            target=self._loop, name="oceanova-refresh", daemon=True
        )
        self._thread.start()
        logger.info("Daemon started: interval=%.0fs", self.interval)

    def stop(self, timeout: float | None = None) -> None:
        """Stop future ticks, cancel the in-flight cycle and join the thread."""
        self._stop.set()
        self._wake.set()
        self.orchestrator.cancel_in_flight()
        if self._thread is not None:
            self._thread.join(timeout)
        logger.info(
            "Daemon stopped: %d cycles (%d ok, %d failed)",
            self.total_cycles, self.total_successes, self.total_failures,
        )

    def change_location(self, location: Location) -> None:
        self.orchestrator.select_location(location)
        self._wake.set()

    def run_forever(self) -> None:
        """Foreground mode for the CLI: run until SIGINT or SIGTERM."""
        self._setup_signals()
        self.start()
        assert self._thread is not None
        try:
            while self._thread.is_alive():
                self._thread.join(1)
        except KeyboardInterrupt:
            logger.info("Daemon interrupted by keyboard")
        finally:
            self.stop()

    def _loop(self) -> None:
        while not self._stop.is_set():
            self._wake.clear()
            self._run_one_cycle()
            # Returns early on location change or stop
            self._wake.wait(self.interval)

    def _run_one_cycle(self) -> None:
        self.total_cycles += 1
        try:
            outcome = self.orchestrator.refresh()
        except Exception:
            self.total_failures += 1
            logger.exception("Cycle #%d crashed", self.total_cycles)
            return
        if outcome == RefreshOutcome.PUBLISHED:
            self.total_successes += 1
        elif outcome == RefreshOutcome.FAILED:
            self.total_failures += 1

    def _setup_signals(self) -> None:
        """Handle SIGTERM and SIGINT for graceful shutdown."""
        def _stop(signum: int, frame: object) -> None:
            sig_name = signal.Signals(signum).name
            logger.info("Received %s, shutting down gracefully...", sig_name)
            self._stop.set()
            self._wake.set()

        signal.signal(signal.SIGTERM, _stop)
        signal.signal(signal.SIGINT, _stop)
