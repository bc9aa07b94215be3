"""Record filtering by date range and categorical selectors."""

from __future__ import annotations

from typing import Iterable

from ...models.domain import ANY, FilterState, Record
from ..dates import parse_record_date


def _matches_selector(selected: str, value: str | None) -> bool:
    return selected == ANY or value == selected


def matches(record: Record, filters: FilterState) -> bool:
    """True when the record passes every active predicate."""
    if filters.start_date is not None or filters.end_date is not None:
        recorded = parse_record_date(record.recorded_date)
        if recorded is None:
            return False
        if filters.start_date is not None and recorded < filters.start_date:
            return False
        if filters.end_date is not None and recorded > filters.end_date:
            return False

    return (
        _matches_selector(filters.vehicle, record.vehicle)
        and _matches_selector(filters.customer, record.customer)
        and _matches_selector(filters.status, record.status)
    )


def filter_records(records: Iterable[Record], filters: FilterState) -> list[Record]:
    return [record for record in records if matches(record, filters)]
