"""Feature one movie in the hero banner."""

from __future__ import annotations

import logging

from ..models import Item
from .query import DispatcherClient
from .selection import select_hero_preview
from .surfaces import PreviewSurface, hero_video_surface, static_fallback_surface
from .views import HeroView

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"


class HeroController:
    """Show a movie's text immediately and its trailer once resolved.

    Every call takes a sequence number; when an older call resolves after a
    newer one started, its media is dropped so the slot always reflects the
    latest selection.
    """

    def __init__(
        self,
        client: DispatcherClient,
        view: HeroView,
        *,
        image_base_url: str = DEFAULT_IMAGE_BASE_URL,
    ) -> None:
        self._client = client
        self._view = view
        self._image_base_url = image_base_url
        self._sequence = 0

    @property
    def view(self) -> HeroView:
        return self._view

    async def show(self, item: Item) -> bool:
        """Feature ``item``; returns ``False`` when a newer call superseded it."""

        self._sequence += 1
        token = self._sequence
        self._view.show_text(item.display_title("Featured"), item.overview or "")

        surface = await self._resolve_surface(item)
        if token != self._sequence:
            logger.debug("Discarding stale hero media for %s", item.id)
            return False
        self._view.show_media(surface)
        return True

    async def _resolve_surface(self, item: Item) -> PreviewSurface:
        if item.id is not None:
            try:
                media = await self._client.videos(item.id)
            except Exception as exc:
                logger.warning("Hero video fetch failed for %s: %s", item.id, exc)
            else:
                match = select_hero_preview(media)
                if match is not None:
                    return hero_video_surface(match)
        return static_fallback_surface(item, self._image_base_url)
