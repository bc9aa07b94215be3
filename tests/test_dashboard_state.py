from dataclasses import replace
from datetime import datetime, timezone

import pytest

from src.tms_monitor.models.domain import FilterState, FilterVocabulary, Record, RecordSet, Summary
from src.tms_monitor.services.dashboard.state import (
    FetchFailed,
    FetchFinished,
    FetchStarted,
    FetchSucceeded,
    FiltersChanged,
    PageRequested,
    SourceErrorReported,
    build_view,
    initial_state,
    reduce,
)

SYNCED_AT = datetime(2026, 1, 13, 3, 0, tzinfo=timezone.utc)


def _records(count: int) -> tuple[Record, ...]:
    return tuple(
        Record(
            recorded_date=f"{index + 1}/ม.ค./2026",
            vehicle="70-1234" if index < 5 else "70-5678",
            customer=f"C{index}",
            location=None,
            requested_date=None,
            time_window=None,
            distance_km="1",
            cost="2",
            status="ส่งแล้ว",
        )
        for index in range(count)
    )


def _loaded(count: int, page: int = 1):
    record_set = RecordSet(records=_records(count), vocabulary=FilterVocabulary(cars=("70-1234", "70-5678")))
    state = reduce(initial_state(page_size=10), FetchSucceeded(record_set, SYNCED_AT))
    state = reduce(state, FetchFinished())
    return reduce(state, PageRequested(page))


def test_initial_state_blocks_until_first_load():
    state = initial_state(page_size=10)

    assert state.blocking
    assert state.records == ()
    assert state.pagination.page == 1
    assert state.pagination.page_size == 10


def test_fetch_started_sets_the_flag_for_its_mode():
    state = replace(initial_state(), loading=False)

    assert reduce(state, FetchStarted("initial")).loading
    background = reduce(state, FetchStarted("background"))
    assert background.refreshing
    assert not background.loading


def test_fetch_succeeded_replaces_data_and_clears_error():
    state = replace(initial_state(), error="old problem")
    record_set = RecordSet(records=_records(3), vocabulary=FilterVocabulary(statuses=("ส่งแล้ว",)))

    updated = reduce(state, FetchSucceeded(record_set, SYNCED_AT))

    assert updated.records == record_set.records
    assert updated.vocabulary.statuses == ("ส่งแล้ว",)
    assert updated.error is None
    assert updated.last_synced_at == SYNCED_AT
    assert updated.data_version == state.data_version + 1


def test_fetch_succeeded_clamps_page_when_data_shrinks():
    state = _loaded(25, page=3)
    assert state.pagination.page == 3

    smaller = RecordSet(records=_records(12), vocabulary=FilterVocabulary())
    updated = reduce(state, FetchSucceeded(smaller, SYNCED_AT))

    assert updated.pagination.page == 2


def test_source_error_keeps_existing_records():
    state = _loaded(12)

    updated = reduce(state, SourceErrorReported("quota exceeded"))

    assert updated.error == "quota exceeded"
    assert updated.records == state.records


def test_background_failure_leaves_state_untouched():
    state = _loaded(12)

    assert reduce(state, FetchFailed("background", "offline")) is state


def test_initial_failure_surfaces_notice():
    state = reduce(initial_state(), FetchFailed("initial", "offline"))
    state = reduce(state, FetchFinished())

    assert state.error == "offline"
    assert not state.loading
    assert not state.blocking


def test_fetch_finished_clears_both_flags():
    state = replace(initial_state(), loading=True, refreshing=True)

    finished = reduce(state, FetchFinished())

    assert not finished.loading
    assert not finished.refreshing


def test_filter_change_clamps_current_page():
    state = _loaded(25, page=3)

    narrowed = reduce(state, FiltersChanged(FilterState(vehicle="70-1234")))

    assert narrowed.filters.vehicle == "70-1234"
    assert narrowed.pagination.page == 1


@pytest.mark.parametrize(("requested", "expected"), [(2, 2), (99, 3), (0, 1), (-4, 1)])
def test_page_requests_are_clamped(requested, expected):
    state = _loaded(25)
    assert reduce(state, PageRequested(requested)).pagination.page == expected


def test_build_view_over_empty_state():
    view = build_view(initial_state(page_size=10))

    assert view.filtered == []
    assert view.summary == Summary()
    assert view.total_pages == 1
    assert view.page_records == []
    assert view.page_numbers == [1]


def test_build_view_slices_current_page():
    view = build_view(_loaded(25, page=3))

    assert view.page == 3
    assert view.total_pages == 3
    assert [record.customer for record in view.page_records] == ["C4", "C3", "C2", "C1", "C0"]
    assert view.summary.count == 25
    assert view.page_numbers == [1, 2, 3]


def test_unknown_event_is_rejected():
    with pytest.raises(TypeError):
        reduce(initial_state(), object())
