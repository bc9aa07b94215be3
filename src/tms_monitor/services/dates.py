"""Date parsing and display helpers for delivery records."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from email.utils import parsedate_to_datetime
from typing import Any

from ..config import settings

MONTH_ABBREVIATIONS = (
    "ม.ค.", "ก.พ.", "มี.ค.", "เม.ย.", "พ.ค.", "มิ.ย.",
    "ก.ค.", "ส.ค.", "ก.ย.", "ต.ค.", "พ.ย.", "ธ.ค.",
)
_MONTH_NUMBERS = {name: index + 1 for index, name in enumerate(MONTH_ABBREVIATIONS)}

EMPTY_DISPLAY = "-"


def display_timezone(utc_offset_hours: float | None = None) -> timezone:
    hours = settings.display_utc_offset_hours if utc_offset_hours is None else utc_offset_hours
    return timezone(timedelta(hours=hours))


def _leading_int(text: str) -> int | None:
    """Integer prefix of ``text`` ("07x" -> 7), or None when there is no digit to read."""
    stripped = text.strip()
    sign = 1
    if stripped[:1] in ("+", "-"):
        sign = -1 if stripped[0] == "-" else 1
        stripped = stripped[1:]
    digits = ""
    for char in stripped:
        if not char.isascii() or not char.isdigit():
            break
        digits += char
    return sign * int(digits) if digits else None


def _date_from_parts(day_part: str, month_part: str, year_part: str) -> date | None:
    month = _MONTH_NUMBERS.get(month_part)
    if month is None:
        month = _leading_int(month_part)
    try:
        return date(int(year_part.strip()), month, int(day_part.strip()))
    except (TypeError, ValueError):
        return None


def _date_from_timestamp(text: str, utc_offset_hours: float | None) -> date | None:
    try:
        moment = datetime.fromisoformat(text)
    except ValueError:
        try:
            moment = parsedate_to_datetime(text)
        except (TypeError, ValueError):
            return None
    if moment.tzinfo is not None:
        moment = moment.astimezone(display_timezone(utc_offset_hours))
    return moment.date()


def parse_record_date(value: Any, *, utc_offset_hours: float | None = None) -> date | None:
    """Normalize a record date to a calendar date.

    Accepts ``day/monthAbbreviation/year`` (Thai month table or a 1-based month
    number), ISO-8601 timestamps and RFC 2822 timestamps such as
    ``Tue, 13 Jan 2026 03:00:00 GMT``. Aware timestamps are read in the display
    timezone. Anything else yields None instead of raising.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(display_timezone(utc_offset_hours))
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None
    parts = text.split("/")
    if len(parts) == 3:
        return _date_from_parts(*parts)
    return _date_from_timestamp(text, utc_offset_hours)


def parse_bound(value: Any) -> date | None:
    """Parse a date-picker value (``YYYY-MM-DD``); blank means no bound."""
    if value is None or isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    return date.fromisoformat(text)


def format_display_date(value: Any, *, utc_offset_hours: float | None = None) -> str:
    """Render a record date as ``d/monthAbbreviation/yyyy``; never raises, never empty."""
    if value is None or value == "":
        return EMPTY_DISPLAY
    parsed = parse_record_date(value, utc_offset_hours=utc_offset_hours)
    if parsed is not None:
        return f"{parsed.day}/{MONTH_ABBREVIATIONS[parsed.month - 1]}/{parsed.year}"
    fallback = str(value).split(" ")[0].split("T")[0]
    return fallback or EMPTY_DISPLAY


def format_sync_time(moment: datetime | None, *, utc_offset_hours: float | None = None) -> str | None:
    """Last-sync label (``HH:MM:SS``) in the display timezone."""
    if moment is None:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(display_timezone(utc_offset_hours)).strftime("%H:%M:%S")
