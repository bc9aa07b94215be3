"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/source", status_code=status.HTTP_200_OK)
def health_source() -> dict:
    """Check that the records source answers with a usable payload."""
    from ...services.source.client import check_health

    return {"service": "source", "healthy": check_health()}
