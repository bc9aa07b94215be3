"""Display ordering and page slicing for the filtered record set."""

from __future__ import annotations

import math
from typing import Sequence, TypeVar

T = TypeVar("T")


def display_order(records: Sequence[T]) -> list[T]:
    """Newest first: the reverse of the order the source returned."""
    return list(reversed(records))


def total_pages(count: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError("page_size must be at least 1.")
    return max(1, math.ceil(count / page_size))


def clamp_page(page: int, pages: int) -> int:
    return min(max(page, 1), max(pages, 1))


def paginate(records: Sequence[T], page: int, page_size: int) -> list[T]:
    """Return one page of the display order; empty when ``page`` is past the end."""
    if page < 1:
        raise ValueError("page must be 1 or greater.")
    if page_size < 1:
        raise ValueError("page_size must be at least 1.")
    offset = (page - 1) * page_size
    return display_order(records)[offset : offset + page_size]


def page_window(current: int, pages: int, size: int = 5) -> list[int]:
    """Page numbers for the navigation control, centred on ``current``."""
    before = size // 2
    after = size - before
    start = max(0, current - before - 1)
    stop = min(pages, current + after - 1)
    return list(range(start + 1, stop + 1))
