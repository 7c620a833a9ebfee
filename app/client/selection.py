"""Rules for picking the video to preview from a movie's video list."""

from __future__ import annotations

from typing import Iterable

from ..models import MediaKind, PreviewMedia

PREVIEW_SITE = "YouTube"

HERO_KINDS: frozenset[MediaKind] = frozenset({"Trailer", "Teaser"})
CARD_KINDS: frozenset[MediaKind] = frozenset({"Trailer", "Teaser", "Clip"})


def select_preview(
    media: Iterable[PreviewMedia],
    accepted: frozenset[MediaKind],
    *,
    site: str = PREVIEW_SITE,
) -> PreviewMedia | None:
    """Return the first entry hosted on ``site`` with an accepted kind.

    List order wins over kind preference. ``None`` means no preview is
    available, which callers treat differently from a failed fetch.
    """

    for entry in media:
        if entry.site == site and entry.kind in accepted:
            return entry
    return None


def select_hero_preview(media: Iterable[PreviewMedia]) -> PreviewMedia | None:
    return select_preview(media, HERO_KINDS)


def select_card_preview(media: Iterable[PreviewMedia]) -> PreviewMedia | None:
    return select_preview(media, CARD_KINDS)
