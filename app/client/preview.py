"""Debounced hover previews for poster cards.

Each registered card owns a :data:`CardPreviewState`:

``Idle`` -> ``PendingFetch`` on pointer-enter (a debounce timer is armed),
``PendingFetch`` -> ``Mounted`` once the video list resolves, and any state
-> ``Idle`` on pointer-leave.

Every pointer-enter opens a new hover session. The fetch for a session may
only mount its surface while the card is still pending for that same
session; a result that arrives after the pointer left is dropped.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from dataclasses import dataclass
from typing import Union

from ..models import Item
from .query import DispatcherClient, DispatcherQueryError
from .selection import select_card_preview
from .surfaces import (
    PREVIEW_FAILED,
    PREVIEW_NOT_AVAILABLE,
    PreviewSurface,
    card_video_surface,
    message_surface,
)
from .views import CardView

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_DELAY_SECONDS = 0.35


@dataclass(frozen=True, slots=True)
class Idle:
    """Nothing scheduled and nothing mounted."""


@dataclass(slots=True)
class PendingFetch:
    session: int
    timer: asyncio.TimerHandle | None = None
    task: asyncio.Task[None] | None = None


@dataclass(frozen=True, slots=True)
class Mounted:
    session: int
    surface: PreviewSurface


CardPreviewState = Union[Idle, PendingFetch, Mounted]

IDLE = Idle()


class PreviewScheduler:
    """Hover-preview state machine for every card on the page."""

    def __init__(
        self,
        client: DispatcherClient,
        *,
        delay_seconds: float = DEFAULT_PREVIEW_DELAY_SECONDS,
    ) -> None:
        self._client = client
        self._delay = delay_seconds
        self._cards: dict[str, CardView] = {}
        self._states: dict[str, CardPreviewState] = {}
        self._sessions = itertools.count(1)
        self._tasks: set[asyncio.Task[None]] = set()

    def register(self, card: CardView) -> None:
        self._cards[card.card_id] = card
        self._states[card.card_id] = IDLE

    def remove(self, card_id: str) -> None:
        """Drop a card that is no longer displayed."""

        self.pointer_leave(card_id)
        self._cards.pop(card_id, None)
        self._states.pop(card_id, None)

    def state(self, card_id: str) -> CardPreviewState:
        return self._states.get(card_id, IDLE)

    def pointer_enter(self, card_id: str) -> None:
        if card_id not in self._cards:
            logger.debug("Ignoring pointer-enter for unknown card %s", card_id)
            return
        if not isinstance(self._states[card_id], Idle):
            return

        session = next(self._sessions)
        timer = asyncio.get_running_loop().call_later(
            self._delay, self._on_timer, card_id, session
        )
        self._states[card_id] = PendingFetch(session=session, timer=timer)

    def pointer_leave(self, card_id: str) -> None:
        """Return a card to ``Idle``; safe from any state and when repeated."""

        state = self._states.get(card_id)
        if state is None:
            return
        if isinstance(state, PendingFetch) and state.timer is not None:
            state.timer.cancel()
        if isinstance(state, Mounted):
            card = self._cards.get(card_id)
            if card is not None:
                card.unmount()
        self._states[card_id] = IDLE

    async def join(self) -> None:
        """Wait for every in-flight preview fetch to settle."""

        while self._tasks:
            await asyncio.gather(*tuple(self._tasks), return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel pending timers and in-flight fetches."""

        for card_id, state in list(self._states.items()):
            if isinstance(state, PendingFetch):
                if state.timer is not None:
                    state.timer.cancel()
                if state.task is not None:
                    state.task.cancel()
                self._states[card_id] = IDLE
        await self.join()

    def _is_current(self, card_id: str, session: int) -> bool:
        state = self._states.get(card_id)
        return isinstance(state, PendingFetch) and state.session == session

    def _on_timer(self, card_id: str, session: int) -> None:
        state = self._states.get(card_id)
        if not isinstance(state, PendingFetch) or state.session != session:
            return
        state.timer = None
        task = asyncio.get_running_loop().create_task(
            self._fetch_and_mount(card_id, session)
        )
        state.task = task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _fetch_and_mount(self, card_id: str, session: int) -> None:
        card = self._cards.get(card_id)
        if card is None:
            return
        surface = await self._resolve_surface(card.item)
        if not self._is_current(card_id, session):
            logger.debug("Discarding stale preview for card %s", card_id)
            return
        card.mount(surface)
        self._states[card_id] = Mounted(session=session, surface=surface)

    async def _resolve_surface(self, item: Item) -> PreviewSurface:
        if item.id is None:
            return message_surface(PREVIEW_NOT_AVAILABLE)
        try:
            media = await self._client.videos(item.id)
        except DispatcherQueryError as exc:
            logger.warning("Preview fetch failed for %s: %s", item.id, exc)
            return message_surface(PREVIEW_FAILED)
        except Exception:
            logger.exception("Unexpected preview failure for %s", item.id)
            return message_surface(PREVIEW_FAILED)

        match = select_card_preview(media)
        if match is None:
            return message_surface(PREVIEW_NOT_AVAILABLE)
        return card_video_surface(match)
