"""Serialize records into display rows and CSV exports."""

from __future__ import annotations

import csv
import io
from typing import Sequence

from ...models.domain import Record
from ..dates import format_display_date
from ..records import display_order

UNSPECIFIED_TIME_WINDOW = "ไม่ระบุเวลา"
UNKNOWN_STATUS = "N/A"


def record_to_row(record: Record) -> dict:
    return {
        "recorded_date": record.recorded_date,
        "recorded_date_display": format_display_date(record.recorded_date),
        "vehicle": record.vehicle,
        "customer": record.customer,
        "location": record.location,
        "requested_date": record.requested_date,
        "requested_date_display": format_display_date(record.requested_date),
        "time_window": record.time_window or UNSPECIFIED_TIME_WINDOW,
        "distance_km": "" if record.distance_km is None else str(record.distance_km),
        "cost": "" if record.cost is None else str(record.cost),
        "status": record.status or UNKNOWN_STATUS,
    }


def records_to_csv(records: Sequence[Record]) -> str:
    """CSV of ``records`` in display order (newest first)."""
    buffer = io.StringIO()
    fieldnames = [
        "recorded_date",
        "vehicle",
        "customer",
        "location",
        "requested_date",
        "time_window",
        "distance_km",
        "cost",
        "status",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for record in display_order(records):
        writer.writerow(
            {
                "recorded_date": format_display_date(record.recorded_date),
                "vehicle": record.vehicle or "",
                "customer": record.customer or "",
                "location": record.location or "",
                "requested_date": format_display_date(record.requested_date),
                "time_window": record.time_window or "",
                "distance_km": "" if record.distance_km is None else record.distance_km,
                "cost": "" if record.cost is None else record.cost,
                "status": record.status or "",
            }
        )
    return buffer.getvalue()
