"""Thin adapter over The Movie Database (TMDB) REST API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

import httpx

from ..utils import redact_secret

logger = logging.getLogger(__name__)


class TMDBTransportError(RuntimeError):
    """Raised when TMDB could not be reached at all."""


@dataclass(slots=True)
class UpstreamResult:
    """Classified outcome of a single TMDB request."""

    ok: bool
    status_code: int
    data: Any = None
    text: str = ""


class TMDBClient:
    """Performs credentialed GET requests against TMDB."""

    def __init__(self, http_client: httpx.AsyncClient, api_key: str):
        if not api_key:
            raise ValueError("TMDB API key is required when initialising TMDBClient")
        self._client = http_client
        self._api_key = api_key

    async def fetch_upstream(
        self, path: str, params: Mapping[str, Any] | None = None
    ) -> UpstreamResult:
        """Issue one GET and classify the response without retrying."""

        query = {**(params or {}), "api_key": self._api_key}
        endpoint = "/" + path.lstrip("/")
        try:
            response = await self._client.get(endpoint, params=query)
        except httpx.HTTPError as exc:
            message = redact_secret(str(exc), self._api_key) or type(exc).__name__
            logger.warning("TMDB request to %s failed: %s", endpoint, message)
            raise TMDBTransportError(message) from exc

        if not response.is_success:
            logger.warning(
                "TMDB request to %s returned %s", endpoint, response.status_code
            )
            return UpstreamResult(
                ok=False, status_code=response.status_code, text=response.text
            )

        return UpstreamResult(
            ok=True, status_code=response.status_code, data=response.json()
        )
