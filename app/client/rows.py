"""Populate one browse row per catalog bucket."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Sequence

from ..genres import CatalogBucket
from ..models import DEFAULT_PAGE_LIMIT
from .query import DispatcherClient
from .views import BrowseView, CardView, TrackView

logger = logging.getLogger(__name__)


class RowLoader:
    """Fetch a discovery page per bucket, isolating failures to their row."""

    def __init__(
        self,
        client: DispatcherClient,
        *,
        page_limit: int = DEFAULT_PAGE_LIMIT,
        on_card: Callable[[CardView], None] | None = None,
    ) -> None:
        self._client = client
        self._page_limit = page_limit
        self._on_card = on_card

    async def load(
        self, buckets: Sequence[CatalogBucket], view: BrowseView
    ) -> list[TrackView]:
        """Create tracks in declared order, then fill them concurrently."""

        tracks = [view.add_row(bucket) for bucket in buckets]
        await asyncio.gather(*(self._populate(track) for track in tracks))
        return tracks

    async def _populate(self, track: TrackView) -> None:
        bucket = track.bucket
        try:
            items = await self._client.discover(bucket.id, limit=self._page_limit)
        except Exception as exc:
            logger.warning("Failed to load row %s: %s", bucket.display_name, exc)
            track.show_message(f"Failed to load {bucket.display_name}")
            return
        finally:
            track.loading = False

        for index, item in enumerate(items):
            card = CardView(card_id=f"{bucket.id}:{index}:{item.id}", item=item)
            track.add_card(card)
            if self._on_card is not None:
                self._on_card(card)
