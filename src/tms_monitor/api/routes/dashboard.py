"""Dashboard view and interaction endpoints."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, Request, Response, status

from ...models.domain import FilterState, FilterVocabulary
from ...schemas.dashboard import (
    DashboardResponse,
    FilterOptionsModel,
    FilterStateModel,
    PageRequest,
    RecordRowModel,
    RefreshResponse,
    SummaryModel,
)
from ...services.dashboard import DashboardController
from ...services.dates import format_sync_time
from ...services.outputs.formatter import record_to_row, records_to_csv

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def get_controller(request: Request) -> DashboardController:
    return request.app.state.controller


def _dashboard_response(controller: DashboardController) -> DashboardResponse:
    state = controller.state
    view = controller.view(state)
    return DashboardResponse(
        loading=state.loading,
        refreshing=state.refreshing,
        blocking=state.blocking,
        polling=controller.polling,
        error=state.error,
        last_synced_at=state.last_synced_at.isoformat() if state.last_synced_at else None,
        last_synced_label=format_sync_time(state.last_synced_at),
        filters=FilterStateModel(**asdict(state.filters)),
        options=_options_model(state.vocabulary),
        summary=SummaryModel(**asdict(view.summary)),
        page=view.page,
        page_size=state.pagination.page_size,
        total_pages=view.total_pages,
        page_numbers=view.page_numbers,
        items=[RecordRowModel(**record_to_row(record)) for record in view.page_records],
    )


def _options_model(vocabulary: FilterVocabulary) -> FilterOptionsModel:
    return FilterOptionsModel(
        cars=list(vocabulary.cars),
        customers=list(vocabulary.customers),
        statuses=list(vocabulary.statuses),
    )


@router.get("", response_model=DashboardResponse, status_code=status.HTTP_200_OK)
def get_dashboard(controller: DashboardController = Depends(get_controller)) -> DashboardResponse:
    return _dashboard_response(controller)


@router.get("/options", response_model=FilterOptionsModel, status_code=status.HTTP_200_OK)
def get_filter_options(controller: DashboardController = Depends(get_controller)) -> FilterOptionsModel:
    return _options_model(controller.state.vocabulary)


@router.put("/filters", response_model=DashboardResponse, status_code=status.HTTP_200_OK)
def update_filters(
    filters: FilterStateModel,
    controller: DashboardController = Depends(get_controller),
) -> DashboardResponse:
    controller.set_filters(FilterState(**filters.model_dump()))
    return _dashboard_response(controller)


@router.delete("/filters", response_model=DashboardResponse, status_code=status.HTTP_200_OK)
def reset_filters(controller: DashboardController = Depends(get_controller)) -> DashboardResponse:
    controller.reset_filters()
    return _dashboard_response(controller)


@router.post("/page", response_model=DashboardResponse, status_code=status.HTTP_200_OK)
def change_page(
    request: PageRequest,
    controller: DashboardController = Depends(get_controller),
) -> DashboardResponse:
    if request.action == "next":
        controller.next_page()
    elif request.action == "previous":
        controller.previous_page()
    else:
        controller.go_to_page(request.page)
    return _dashboard_response(controller)


@router.post("/refresh", response_model=RefreshResponse, status_code=status.HTTP_200_OK)
def refresh_dashboard(controller: DashboardController = Depends(get_controller)) -> RefreshResponse:
    outcome = controller.refresh("initial")
    return RefreshResponse(**asdict(outcome))


@router.get("/export", status_code=status.HTTP_200_OK)
def export_filtered_records(controller: DashboardController = Depends(get_controller)) -> Response:
    content = records_to_csv(controller.view().filtered)
    return Response(
        content=content.encode("utf-8-sig"),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="deliveries.csv"'},
    )
