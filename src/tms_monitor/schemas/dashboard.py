"""Dashboard API schemas."""

from __future__ import annotations

from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ..models.domain import ANY
from ..services.dates import parse_bound


class FilterStateModel(BaseModel):
    start_date: Optional[date] = Field(default=None, description="Inclusive lower bound on the recorded date.")
    end_date: Optional[date] = Field(default=None, description="Inclusive upper bound on the recorded date.")
    vehicle: str = Field(default=ANY, description="Vehicle plate, or 'all'.")
    customer: str = Field(default=ANY, description="Customer name, or 'all'.")
    status: str = Field(default=ANY, description="Delivery status, or 'all'.")

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _blank_means_unset(cls, value):
        return parse_bound(value)


class FilterOptionsModel(BaseModel):
    cars: List[str]
    customers: List[str]
    statuses: List[str]


class SummaryModel(BaseModel):
    count: int
    total_distance_km: float
    total_cost: float
    delivered: int
    cancelled: int


class RecordRowModel(BaseModel):
    recorded_date: Optional[str] = None
    recorded_date_display: str
    vehicle: Optional[str] = None
    customer: Optional[str] = None
    location: Optional[str] = None
    requested_date: Optional[str] = None
    requested_date_display: str
    time_window: str
    distance_km: str
    cost: str
    status: str


class PageRequest(BaseModel):
    page: Optional[int] = Field(default=None, ge=1, description="1-based page to show.")
    action: Optional[Literal["next", "previous"]] = None

    @model_validator(mode="after")
    def _exactly_one(self) -> "PageRequest":
        if (self.page is None) == (self.action is None):
            raise ValueError("Provide either 'page' or 'action'.")
        return self


class DashboardResponse(BaseModel):
    loading: bool
    refreshing: bool
    blocking: bool
    polling: bool
    error: Optional[str] = None
    last_synced_at: Optional[str] = None
    last_synced_label: Optional[str] = None
    filters: FilterStateModel
    options: FilterOptionsModel
    summary: SummaryModel
    page: int
    page_size: int
    total_pages: int
    page_numbers: List[int]
    items: List[RecordRowModel]


class RefreshResponse(BaseModel):
    status: str
    mode: str
    record_count: int
    message: Optional[str] = None
