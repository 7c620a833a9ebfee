"""In-memory view state a front end renders from.

These objects stand in for DOM nodes: they record what is currently shown
and nothing else.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..genres import CatalogBucket
from ..models import Item
from .surfaces import PreviewSurface


@dataclass(slots=True)
class CardView:
    """A poster card in a row track with an optional preview surface."""

    card_id: str
    item: Item
    preview: PreviewSurface | None = None
    mount_count: int = 0

    @property
    def title(self) -> str:
        return self.item.display_title()

    def mount(self, surface: PreviewSurface) -> None:
        self.preview = surface
        self.mount_count += 1

    def unmount(self) -> None:
        self.preview = None


@dataclass(slots=True)
class TrackView:
    """A single genre row; shows either cards or a fallback message."""

    bucket: CatalogBucket
    cards: list[CardView] = field(default_factory=list)
    message: str | None = None
    loading: bool = True

    def add_card(self, card: CardView) -> None:
        self.cards.append(card)

    def show_message(self, text: str) -> None:
        self.cards.clear()
        self.message = text


@dataclass(slots=True)
class HeroView:
    title: str = ""
    overview: str = ""
    media: PreviewSurface | None = None

    def show_text(self, title: str, overview: str) -> None:
        self.title = title
        self.overview = overview

    def show_media(self, surface: PreviewSurface) -> None:
        self.media = surface


@dataclass(slots=True)
class BrowseView:
    """The whole page: rows in declared order plus the hero slot."""

    rows: list[TrackView] = field(default_factory=list)
    hero: HeroView = field(default_factory=HeroView)

    def add_row(self, bucket: CatalogBucket) -> TrackView:
        track = TrackView(bucket=bucket)
        self.rows.append(track)
        return track

    def row(self, bucket_id: int) -> TrackView:
        for track in self.rows:
            if track.bucket.id == bucket_id:
                return track
        raise KeyError(f"No row for bucket {bucket_id}")

    def cards(self) -> dict[str, CardView]:
        return {card.card_id: card for track in self.rows for card in track.cards}
