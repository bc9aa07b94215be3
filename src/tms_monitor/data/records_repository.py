"""Ingestion boundary: turn the source payload into structured records."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from ..models.domain import FilterVocabulary, Record, RecordSet
from ..services.source.client import SourceReportedError, SourceUnavailableError

# Source column labels -> Record attribute names.
FIELD_LABELS = {
    "วันที่บันทึกข้อมูล": "recorded_date",
    "ทะเบียนรถ": "vehicle",
    "Customer": "customer",
    "Location": "location",
    "วันที่ต้องการส่งสินค้า": "requested_date",
    "ช่วงเวลา": "time_window",
    "ระยะทางไปกลับ (km)": "distance_km",
    "ค่าใช้จ่ายตาม Supplier": "cost",
    "สถานะการขนส่ง": "status",
}

# Attributes that keep whatever the source sent (numbers, strings, blanks).
_RAW_VALUE_FIELDS = {"distance_km", "cost"}


def _coerce_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return str(value)


def record_from_item(item: Mapping[str, Any]) -> Record:
    values: dict[str, Any] = {}
    for label, attribute in FIELD_LABELS.items():
        value = item.get(label)
        values[attribute] = value if attribute in _RAW_VALUE_FIELDS else _coerce_text(value)
    return Record(**values, raw=dict(item))


def _vocabulary_values(values: Any) -> tuple[str, ...]:
    if not isinstance(values, (list, tuple)):
        return tuple()
    return tuple(str(value) for value in values if value is not None)


def vocabulary_from_filters(filters: Any) -> FilterVocabulary:
    if not isinstance(filters, Mapping):
        return FilterVocabulary()
    return FilterVocabulary(
        cars=_vocabulary_values(filters.get("cars")),
        customers=_vocabulary_values(filters.get("customers")),
        statuses=_vocabulary_values(filters.get("statuses")),
    )


def parse_payload(payload: Any) -> RecordSet:
    """Build a RecordSet from a decoded source body.

    Raises SourceReportedError for ``{"error": ...}`` bodies and
    SourceUnavailableError when the body is not shaped like a payload at all.
    """
    if not isinstance(payload, Mapping):
        raise SourceUnavailableError(f"Unexpected payload type: {type(payload).__name__}")

    error = payload.get("error")
    if error:
        raise SourceReportedError(str(error))

    items: Iterable[Any] = payload.get("items") or []
    if not isinstance(items, list):
        raise SourceUnavailableError("Payload 'items' is not a list.")

    records = tuple(record_from_item(item) for item in items if isinstance(item, Mapping))
    return RecordSet(records=records, vocabulary=vocabulary_from_filters(payload.get("filters")))
