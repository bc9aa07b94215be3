"""Dashboard application state and its transitions.

State is an immutable snapshot. Every change goes through ``reduce(state,
event)``, which returns a new snapshot, so the whole lifecycle (fetching,
filtering, paging) can be exercised without a server or a timer.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Literal, Optional, Union

from ...models.domain import FilterState, FilterVocabulary, PaginationState, Record, RecordSet, Summary
from ..records import clamp_page, compute_summary, filter_records, page_window, paginate, total_pages

RefreshMode = Literal["initial", "background"]


@dataclass(frozen=True, slots=True)
class DashboardState:
    records: tuple[Record, ...] = ()
    vocabulary: FilterVocabulary = field(default_factory=FilterVocabulary)
    filters: FilterState = field(default_factory=FilterState)
    pagination: PaginationState = field(default_factory=PaginationState)
    loading: bool = True
    refreshing: bool = False
    error: Optional[str] = None
    last_synced_at: Optional[datetime] = None
    data_version: int = 0

    @property
    def blocking(self) -> bool:
        """Nothing has loaded yet and a load is pending."""
        return self.loading and not self.records


@dataclass(frozen=True, slots=True)
class FetchStarted:
    mode: RefreshMode


@dataclass(frozen=True, slots=True)
class FetchSucceeded:
    record_set: RecordSet
    synced_at: datetime


@dataclass(frozen=True, slots=True)
class SourceErrorReported:
    message: str


@dataclass(frozen=True, slots=True)
class FetchFailed:
    mode: RefreshMode
    message: str


@dataclass(frozen=True, slots=True)
class FetchFinished:
    pass


@dataclass(frozen=True, slots=True)
class FiltersChanged:
    filters: FilterState


@dataclass(frozen=True, slots=True)
class PageRequested:
    page: int


Event = Union[
    FetchStarted,
    FetchSucceeded,
    SourceErrorReported,
    FetchFailed,
    FetchFinished,
    FiltersChanged,
    PageRequested,
]


def initial_state(page_size: int = 10) -> DashboardState:
    return DashboardState(pagination=PaginationState(page=1, page_size=page_size))


def _with_clamped_page(state: DashboardState) -> DashboardState:
    pages = total_pages(len(filter_records(state.records, state.filters)), state.pagination.page_size)
    page = clamp_page(state.pagination.page, pages)
    if page == state.pagination.page:
        return state
    return replace(state, pagination=replace(state.pagination, page=page))


def reduce(state: DashboardState, event: Event) -> DashboardState:
    if isinstance(event, FetchStarted):
        if event.mode == "initial":
            return replace(state, loading=True)
        return replace(state, refreshing=True)

    if isinstance(event, FetchSucceeded):
        updated = replace(
            state,
            records=event.record_set.records,
            vocabulary=event.record_set.vocabulary,
            last_synced_at=event.synced_at,
            error=None,
            data_version=state.data_version + 1,
        )
        return _with_clamped_page(updated)

    if isinstance(event, SourceErrorReported):
        return replace(state, error=event.message)

    if isinstance(event, FetchFailed):
        # Background failures keep the working view untouched.
        if event.mode == "initial":
            return replace(state, error=event.message)
        return state

    if isinstance(event, FetchFinished):
        return replace(state, loading=False, refreshing=False)

    if isinstance(event, FiltersChanged):
        return _with_clamped_page(replace(state, filters=event.filters))

    if isinstance(event, PageRequested):
        pages = total_pages(len(filter_records(state.records, state.filters)), state.pagination.page_size)
        page = clamp_page(event.page, pages)
        return replace(state, pagination=replace(state.pagination, page=page))

    raise TypeError(f"Unsupported dashboard event: {type(event).__name__}")


@dataclass(frozen=True, slots=True)
class DashboardView:
    """Everything a renderer needs for one frame, derived from a state snapshot."""

    filtered: list[Record]
    summary: Summary
    page: int
    total_pages: int
    page_records: list[Record]
    page_numbers: list[int]


def build_view(state: DashboardState, *, window_size: int = 5) -> DashboardView:
    filtered = filter_records(state.records, state.filters)
    pages = total_pages(len(filtered), state.pagination.page_size)
    page = state.pagination.page
    return DashboardView(
        filtered=filtered,
        summary=compute_summary(filtered),
        page=page,
        total_pages=pages,
        page_records=paginate(filtered, page, state.pagination.page_size),
        page_numbers=page_window(page, pages, window_size),
    )
