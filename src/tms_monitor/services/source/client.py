"""HTTP client for the delivery records source."""

from __future__ import annotations

import logging
import time

import httpx

from ...config import settings

logger = logging.getLogger(__name__)


class SourceError(Exception):
    """Base class for failures while pulling data from the source."""


class SourceUnavailableError(SourceError):
    """The source could not be reached or returned something that is not a JSON object."""


class SourceReportedError(SourceError):
    """The source answered with an ``{"error": ...}`` payload."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SourceClient:
    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or settings.source_url
        if not self.base_url:
            raise ValueError("Source URL is not configured.")
        self.timeout = timeout if timeout is not None else settings.source_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.source_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.source_backoff_seconds
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        # One short-lived client per fetch; the scheduler and request handlers run on different threads.
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            follow_redirects=True,
            transport=self._transport,
        )

    def fetch(self) -> dict:
        """GET the source without parameters and return the decoded JSON object."""
        client = self._get_client()
        try:
            attempt = 0
            while True:
                try:
                    response = client.get(self.base_url)
                    response.raise_for_status()
                    data = response.json()
                    if not isinstance(data, dict):
                        raise ValueError(f"Expected a JSON object, got {type(data).__name__}.")
                    return data
                except (httpx.HTTPError, ValueError) as exc:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise SourceUnavailableError(
                            f"Failed to load data from {self.base_url}: {exc}"
                        ) from exc
                    wait_time = self.backoff_seconds * attempt
                    logger.debug(
                        f"Source request failed, retrying in {wait_time:.1f}s "
                        f"(attempt {attempt}/{self.max_retries}): {exc}"
                    )
                    time.sleep(wait_time)
        finally:
            client.close()


def check_health(base_url: str | None = None) -> bool:
    """Return True when the source answers with a JSON object that is not an error payload."""
    base = base_url or settings.source_url
    if not base:
        return False
    try:
        response = httpx.get(base, timeout=5.0, follow_redirects=True)
        response.raise_for_status()
        data = response.json()
        return isinstance(data, dict) and not data.get("error")
    except (httpx.HTTPError, ValueError):
        return False
