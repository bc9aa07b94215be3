"""Summary counters over the filtered record set."""

from __future__ import annotations

import math
import re
from typing import Any, Iterable, Optional

from ...config import settings
from ...models.domain import Record, Summary

_NUMBER_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def coerce_number(value: Any) -> float:
    """Read a leading number the way a lenient float parser would; anything else counts as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _NUMBER_PREFIX.match(str(value))
        if not match:
            return 0.0
        number = float(match.group(1))
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def compute_summary(
    records: Iterable[Record],
    *,
    delivered_status: Optional[str] = None,
    cancelled_status: Optional[str] = None,
) -> Summary:
    delivered_label = delivered_status or settings.delivered_status
    cancelled_label = cancelled_status or settings.cancelled_status

    count = 0
    delivered = 0
    cancelled = 0
    total_distance = 0.0
    total_cost = 0.0
    for record in records:
        count += 1
        total_distance += coerce_number(record.distance_km)
        total_cost += coerce_number(record.cost)
        if record.status == delivered_label:
            delivered += 1
        elif record.status == cancelled_label:
            cancelled += 1

    return Summary(
        count=count,
        total_distance_km=total_distance,
        total_cost=total_cost,
        delivered=delivered,
        cancelled=cancelled,
    )
