"""Source access helpers."""

from .client import (
    SourceClient,
    SourceError,
    SourceReportedError,
    SourceUnavailableError,
    check_health,
)

__all__ = [
    "SourceClient",
    "SourceError",
    "SourceReportedError",
    "SourceUnavailableError",
    "check_health",
]
