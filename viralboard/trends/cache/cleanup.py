"""
Periodic expiry sweep for the trend cache.

Lazy expiry on get/has only removes entries that are read again; this
scheduler removes the rest on a fixed interval.
"""

from __future__ import annotations

import logging
import threading

from viralboard.trends import conf

logger = logging.getLogger("viralboard.trends.cache.cleanup")


class CleanupScheduler:
    """
    Daemon thread calling cache.cleanup() every interval_seconds.

    stop() wakes the thread immediately and joins it. A failing pass is
    logged and the loop carries on.
    """

    def __init__(self, cache, interval_seconds: float | None = None):
        self.cache = cache
        self.interval_seconds = (
            interval_seconds if interval_seconds is not None else conf.get_cleanup_interval_seconds()
        )
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the sweep thread. No-op if already running."""
        with self._lock:
            if self.is_running:
                return
            if self.interval_seconds <= 0:
                raise ValueError("interval_seconds must be positive")
            self._stop_event.clear()
            self._thread = threading.Thread(
                target=self._run,
                name="trend-cache-cleanup",
                daemon=True,
            )
            self._thread.start()
            logger.info("Cache cleanup scheduler started", extra={"interval_seconds": self.interval_seconds})

    def stop(self, timeout: float | None = 5.0) -> None:
        """Signal the thread and wait for it to exit."""
        with self._lock:
            thread = self._thread
            self._stop_event.set()
            if thread is not None:
                thread.join(timeout)
            self._thread = None

    def restart(self, interval_seconds: float | None = None) -> None:
        """Stop, optionally change the interval, start again."""
        self.stop()
        if interval_seconds is not None:
            self.interval_seconds = interval_seconds
        self.start()

    def run_once(self) -> int:
        """One sweep. Returns removed count, 0 on failure."""
        try:
            return self.cache.cleanup()
        except Exception as e:
            logger.exception("Cache cleanup pass failed: %s", str(e))
            return 0

    def _run(self) -> None:
        # wait() returns True once stop() is called
        while not self._stop_event.wait(self.interval_seconds):
            self.run_once()
