"""A browse session wiring rows, hover previews and the hero together."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Sequence

import httpx

from ..config import Settings
from ..genres import CatalogBucket
from .auth import AuthBinding, IdentityWidget
from .hero import DEFAULT_IMAGE_BASE_URL, HeroController
from .preview import PreviewScheduler
from .query import DispatcherClient
from .rows import RowLoader
from .views import BrowseView

logger = logging.getLogger(__name__)

FEATURED_SORT_KEY = "vote_average.desc"


class BrowserSession:
    """Client-side state for one open page; nothing outlives it."""

    def __init__(
        self,
        client: DispatcherClient,
        buckets: Sequence[CatalogBucket],
        *,
        preview_delay_seconds: float = 0.35,
        row_page_limit: int = 20,
        featured_page_limit: int = 10,
        image_base_url: str = DEFAULT_IMAGE_BASE_URL,
        identity: IdentityWidget | None = None,
    ) -> None:
        self.view = BrowseView()
        self.buckets = tuple(buckets)
        self.previews = PreviewScheduler(client, delay_seconds=preview_delay_seconds)
        self.rows = RowLoader(
            client, page_limit=row_page_limit, on_card=self.previews.register
        )
        self.hero = HeroController(
            client, self.view.hero, image_base_url=image_base_url
        )
        self.auth = AuthBinding(identity)
        self._client = client
        self._featured_page_limit = featured_page_limit

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        http_client: httpx.AsyncClient,
        *,
        identity: IdentityWidget | None = None,
    ) -> "BrowserSession":
        return cls(
            DispatcherClient(http_client, settings.dispatcher_path),
            settings.catalog_buckets,
            preview_delay_seconds=settings.preview_delay_seconds,
            row_page_limit=settings.row_page_limit,
            featured_page_limit=settings.featured_page_limit,
            image_base_url=settings.tmdb_image_base_url,
            identity=identity,
        )

    async def start(self) -> None:
        """Load every row, then feature the best-rated movie of the first row."""

        await self.rows.load(self.buckets, self.view)
        await self.show_featured()

    async def show_featured(self) -> None:
        if not self.buckets:
            return
        first = self.buckets[0]
        try:
            items = await self._client.discover(
                first.id,
                limit=self._featured_page_limit,
                sort_by=FEATURED_SORT_KEY,
            )
        except Exception as exc:
            logger.warning("Failed to set featured movie: %s", exc)
            return
        if items:
            await self.hero.show(items[0])

    def pointer_enter(self, card_id: str) -> None:
        self.previews.pointer_enter(card_id)

    def pointer_leave(self, card_id: str) -> None:
        self.previews.pointer_leave(card_id)

    async def select(self, card_id: str) -> bool:
        """Feature the clicked card's movie regardless of its hover state."""

        card = self.view.cards().get(card_id)
        if card is None:
            raise KeyError(f"Unknown card {card_id}")
        return await self.hero.show(card.item)

    async def aclose(self) -> None:
        await self.previews.aclose()


@asynccontextmanager
async def open_session(
    settings: Settings,
    *,
    identity: IdentityWidget | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[BrowserSession]:
    """Open a session against the dispatcher at ``DISPATCHER_URL``."""

    async with httpx.AsyncClient(
        base_url=str(settings.dispatcher_url),
        transport=transport,
        timeout=httpx.Timeout(settings.upstream_timeout_seconds + 5.0, connect=5.0),
    ) as http_client:
        session = BrowserSession.from_settings(settings, http_client, identity=identity)
        try:
            yield session
        finally:
            await session.aclose()
