"""Record view helpers."""

from .filtering import filter_records, matches
from .pagination import clamp_page, display_order, page_window, paginate, total_pages
from .stats import coerce_number, compute_summary

__all__ = [
    "filter_records",
    "matches",
    "compute_summary",
    "coerce_number",
    "display_order",
    "paginate",
    "total_pages",
    "clamp_page",
    "page_window",
]
