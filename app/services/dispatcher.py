"""Validates typed queries and routes them to TMDB."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import Settings
from ..models import (
    CORS_HEADERS,
    DETAILS,
    DISCOVER,
    JSON_HEADERS,
    VIDEOS,
    ResponseEnvelope,
    TypedQuery,
)
from ..utils import quote_path_segment, redact_secret
from .tmdb import TMDBClient, TMDBTransportError, UpstreamResult

logger = logging.getLogger(__name__)


class RequestDispatcher:
    """Translate a :class:`TypedQuery` into exactly one TMDB call.

    The dispatcher never raises; every outcome, including configuration and
    transport faults, is reported as a :class:`ResponseEnvelope`. It holds no
    per-request state, so one instance serves concurrent requests.
    """

    def __init__(self, client: TMDBClient | None, *, api_key: str | None = None):
        self._client = client
        self._api_key = api_key

    @classmethod
    def from_settings(
        cls, settings: Settings, http_client: httpx.AsyncClient
    ) -> "RequestDispatcher":
        """Read the credential once and build the dispatcher around it."""

        api_key = settings.tmdb_api_key
        if not api_key:
            logger.warning("TMDB_API_KEY is not set; every request will fail with 500")
            return cls(None)
        return cls(TMDBClient(http_client, api_key), api_key=api_key)

    @property
    def configured(self) -> bool:
        return self._client is not None

    async def dispatch(self, query: TypedQuery) -> ResponseEnvelope:
        if self._client is None:
            return ResponseEnvelope.error(500, "credential not configured")

        if query.kind == DISCOVER:
            path = "discover/movie"
            params: dict[str, Any] = {
                "with_genres": query.genre_id or "",
                "sort_by": query.resolved_sort_key,
                "page": 1,
            }
        elif query.kind in (VIDEOS, DETAILS):
            if not query.item_id or not query.item_id.strip("."):
                return ResponseEnvelope.error(400, "movieId required")
            movie_id = quote_path_segment(query.item_id)
            path = f"movie/{movie_id}/videos" if query.kind == VIDEOS else f"movie/{movie_id}"
            params = {}
        else:
            return ResponseEnvelope.error(400, "Unknown type")

        try:
            result = await self._client.fetch_upstream(path, params)
            if not result.ok:
                return ResponseEnvelope(
                    status_code=result.status_code,
                    body=result.text,
                    headers=dict(JSON_HEADERS),
                )
            payload = self._shape_payload(query, result)
            return ResponseEnvelope.json_response(
                200, payload, {**JSON_HEADERS, **CORS_HEADERS}
            )
        except TMDBTransportError as exc:
            return ResponseEnvelope.error(500, str(exc))
        except Exception as exc:
            message = redact_secret(str(exc), self._api_key) or type(exc).__name__
            logger.exception("Dispatch of %s query failed", query.kind)
            return ResponseEnvelope.error(500, message)

    @staticmethod
    def _shape_payload(query: TypedQuery, result: UpstreamResult) -> Any:
        payload = result.data
        if query.kind != DISCOVER or not isinstance(payload, dict):
            return payload
        results = payload.get("results")
        if isinstance(results, list) and len(results) > query.resolved_page_limit:
            return {**payload, "results": results[: query.resolved_page_limit]}
        return payload
