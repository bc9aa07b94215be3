"""Domain models for delivery records and dashboard state."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

ANY = "all"


@dataclass(frozen=True, slots=True)
class Record:
    """One delivery entry as received from the source, with stable field names."""

    recorded_date: Optional[str]
    vehicle: Optional[str]
    customer: Optional[str]
    location: Optional[str]
    requested_date: Optional[str]
    time_window: Optional[str]
    distance_km: Any
    cost: Any
    status: Optional[str]
    raw: dict = field(default_factory=dict, compare=False, hash=False, repr=False)


@dataclass(frozen=True, slots=True)
class FilterVocabulary:
    """Allowed selector values supplied by the source alongside the records."""

    cars: tuple[str, ...] = ()
    customers: tuple[str, ...] = ()
    statuses: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class RecordSet:
    records: tuple[Record, ...]
    vocabulary: FilterVocabulary


@dataclass(frozen=True, slots=True)
class FilterState:
    """Active date range and categorical selections. ``ANY`` disables a selector."""

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    vehicle: str = ANY
    customer: str = ANY
    status: str = ANY


@dataclass(frozen=True, slots=True)
class PaginationState:
    page: int = 1
    page_size: int = 10


@dataclass(frozen=True, slots=True)
class Summary:
    count: int = 0
    total_distance_km: float = 0.0
    total_cost: float = 0.0
    delivered: int = 0
    cancelled: int = 0
