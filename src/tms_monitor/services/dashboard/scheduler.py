"""Fixed-interval background refresh."""

from __future__ import annotations

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)


class RefreshScheduler:
    """Calls ``callback`` every ``interval_seconds`` on a daemon thread until stopped.

    ``initial_callback``, when given, runs once on the same thread before the
    first wait, so ``start`` never blocks on it.
    """

    def __init__(
        self,
        callback: Callable[[], object],
        interval_seconds: float,
        *,
        initial_callback: Callable[[], object] | None = None,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive.")
        self.callback = callback
        self.initial_callback = initial_callback
        self.interval_seconds = interval_seconds
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="tms-refresh", daemon=True)
        self._thread.start()
        logger.info(f"Background refresh every {self.interval_seconds:g}s started")

    def stop(self, timeout: float | None = None) -> None:
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None
        logger.info("Background refresh stopped")

    def _run(self) -> None:
        if self.initial_callback is not None and not self._stop_event.is_set():
            self._invoke(self.initial_callback)
        while not self._stop_event.wait(self.interval_seconds):
            self._invoke(self.callback)

    def _invoke(self, callback: Callable[[], object]) -> None:
        try:
            callback()
        except Exception:
            # Keep the timer alive; the next tick retries.
            logger.exception("Background refresh tick failed")
