"""Controller that owns the dashboard state, the source client and the refresh timer."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Literal, Optional

from ...config import settings
from ...data.records_repository import parse_payload
from ...models.domain import FilterState
from ..source.client import SourceClient, SourceReportedError, SourceUnavailableError
from .scheduler import RefreshScheduler
from .state import (
    DashboardState,
    DashboardView,
    Event,
    FetchFailed,
    FetchFinished,
    FetchStarted,
    FetchSucceeded,
    FiltersChanged,
    PageRequested,
    RefreshMode,
    SourceErrorReported,
    build_view,
    initial_state,
    reduce,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RefreshOutcome:
    status: Literal["ok", "source_error", "unavailable", "skipped"]
    mode: RefreshMode
    record_count: int = 0
    message: Optional[str] = None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DashboardController:
    """Single owner of dashboard state.

    Refreshes never overlap: a refresh requested while another is in flight
    is skipped rather than queued.
    """

    def __init__(
        self,
        client: SourceClient | None = None,
        *,
        page_size: int | None = None,
        refresh_interval_seconds: float | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._client = client
        self.refresh_interval_seconds = (
            refresh_interval_seconds if refresh_interval_seconds is not None else settings.refresh_interval_seconds
        )
        self._clock = clock
        self._state = initial_state(page_size or settings.page_size)
        self._state_lock = threading.RLock()
        self._fetch_lock = threading.Lock()
        self._scheduler: RefreshScheduler | None = None

    @property
    def client(self) -> SourceClient:
        if self._client is None:
            self._client = SourceClient()
        return self._client

    @property
    def state(self) -> DashboardState:
        with self._state_lock:
            return self._state

    def dispatch(self, event: Event) -> DashboardState:
        with self._state_lock:
            self._state = reduce(self._state, event)
            return self._state

    def view(self, state: DashboardState | None = None) -> DashboardView:
        return build_view(state or self.state, window_size=settings.page_window_size)

    # -- fetching -----------------------------------------------------------------

    def refresh(self, mode: RefreshMode = "initial") -> RefreshOutcome:
        if not self._fetch_lock.acquire(blocking=False):
            logger.debug(f"Skipping {mode} refresh; another fetch is in flight")
            return RefreshOutcome(status="skipped", mode=mode)

        try:
            self.dispatch(FetchStarted(mode))
            try:
                record_set = parse_payload(self.client.fetch())
            except SourceReportedError as exc:
                logger.warning(f"Source reported an error: {exc.message}")
                self.dispatch(SourceErrorReported(exc.message))
                return RefreshOutcome(status="source_error", mode=mode, message=exc.message)
            except SourceUnavailableError as exc:
                if mode == "initial":
                    logger.error(f"Initial load failed: {exc}")
                else:
                    logger.warning(f"Background refresh failed, keeping last data: {exc}")
                self.dispatch(FetchFailed(mode, settings.connectivity_error_message))
                return RefreshOutcome(status="unavailable", mode=mode, message=str(exc))

            self.dispatch(FetchSucceeded(record_set, self._clock()))
            logger.info(f"Synced {len(record_set.records)} records ({mode})")
            return RefreshOutcome(status="ok", mode=mode, record_count=len(record_set.records))
        finally:
            self.dispatch(FetchFinished())
            self._fetch_lock.release()

    def start(self) -> None:
        """Start polling and return at once.

        The timer thread loads once in initial mode, then refreshes in the
        background on a fixed interval. Until that first load finishes the
        state stays ``blocking``.
        """
        if self._scheduler is None:
            self._scheduler = RefreshScheduler(
                lambda: self.refresh("background"),
                self.refresh_interval_seconds,
                initial_callback=lambda: self.refresh("initial"),
            )
        self._scheduler.start()

    def stop(self) -> None:
        if self._scheduler is not None:
            self._scheduler.stop()
            self._scheduler = None

    @property
    def polling(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    # -- user interaction ------------------------------------------------------------

    def set_filters(self, filters: FilterState) -> DashboardState:
        return self.dispatch(FiltersChanged(filters))

    def reset_filters(self) -> DashboardState:
        return self.dispatch(FiltersChanged(FilterState()))

    def go_to_page(self, page: int) -> DashboardState:
        return self.dispatch(PageRequested(page))

    def next_page(self) -> DashboardState:
        with self._state_lock:
            return self.dispatch(PageRequested(self._state.pagination.page + 1))

    def previous_page(self) -> DashboardState:
        with self._state_lock:
            return self.dispatch(PageRequested(self._state.pagination.page - 1))
