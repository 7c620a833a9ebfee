"""The single query function every client component uses to reach the dispatcher."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from ..models import DETAILS, DISCOVER, VIDEOS, Item, PreviewMedia, parse_results

logger = logging.getLogger(__name__)


class DispatcherQueryError(RuntimeError):
    """Raised when the dispatcher could not answer a client query."""


class DispatcherClient:
    """Send typed queries to the dispatcher's HTTP surface."""

    def __init__(self, http_client: httpx.AsyncClient, path: str = "/api/tmdb"):
        self._client = http_client
        self._path = path

    async def query(self, params: Mapping[str, Any]) -> dict[str, Any]:
        """Return the decoded JSON object for ``params``.

        Any non-2xx answer, transport failure or non-object body raises
        :class:`DispatcherQueryError`.
        """

        query_string = {
            key: str(value) for key, value in params.items() if value is not None
        }
        try:
            response = await self._client.get(self._path, params=query_string)
        except httpx.HTTPError as exc:
            raise DispatcherQueryError(f"Dispatcher unreachable: {exc}") from exc

        if not response.is_success:
            raise DispatcherQueryError(
                f"Dispatcher answered {response.status_code} for {query_string.get('type')}"
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise DispatcherQueryError("Dispatcher returned a non-JSON body") from exc
        if not isinstance(payload, dict):
            raise DispatcherQueryError("Dispatcher returned an unexpected payload")
        return payload

    async def discover(
        self,
        genre_id: int | str | None = None,
        *,
        limit: int | None = None,
        sort_by: str | None = None,
    ) -> list[Item]:
        payload = await self.query(
            {"type": DISCOVER, "genre": genre_id, "limit": limit, "sort_by": sort_by}
        )
        return parse_results(payload, Item)

    async def videos(self, item_id: int | str) -> list[PreviewMedia]:
        payload = await self.query({"type": VIDEOS, "movieId": item_id})
        return parse_results(payload, PreviewMedia)

    async def details(self, item_id: int | str) -> Item:
        payload = await self.query({"type": DETAILS, "movieId": item_id})
        return Item.model_validate(payload)
