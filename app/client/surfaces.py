"""Descriptions of what a front end mounts in a card or the hero slot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal
from urllib.parse import urlencode

from ..models import Item, PreviewMedia

SurfaceKind = Literal["video", "message", "image", "empty"]

YOUTUBE_EMBED_URL = "https://www.youtube.com/embed/{key}"
PREVIEW_NOT_AVAILABLE = "Preview not available"
PREVIEW_FAILED = "Preview failed"


@dataclass(frozen=True, slots=True)
class PreviewSurface:
    """A mountable surface: an embedded video, a notice, or an image."""

    kind: SurfaceKind
    src: str | None = None
    text: str | None = None


def youtube_embed_url(key: str, **params: str | int) -> str:
    base_params: dict[str, str | int] = {"rel": 0, "enablejsapi": 1, "playsinline": 1}
    base_params.update(params)
    return f"{YOUTUBE_EMBED_URL.format(key=key)}?{urlencode(base_params)}"


def card_video_surface(media: PreviewMedia) -> PreviewSurface:
    """Small muted looping preview without controls."""

    src = youtube_embed_url(
        media.key, autoplay=1, mute=1, controls=0, loop=1, playlist=media.key
    )
    return PreviewSurface(kind="video", src=src)


def hero_video_surface(media: PreviewMedia) -> PreviewSurface:
    src = youtube_embed_url(
        media.key, autoplay=1, mute=1, controls=1, loop=1, playlist=media.key
    )
    return PreviewSurface(kind="video", src=src, text="Hero trailer")


def message_surface(text: str) -> PreviewSurface:
    return PreviewSurface(kind="message", text=text)


def image_url(path: str | None, image_base_url: str) -> str | None:
    if not path:
        return None
    if path.startswith("http"):
        return path
    return f"{image_base_url.rstrip('/')}/{path.lstrip('/')}"


def static_fallback_surface(item: Item, image_base_url: str) -> PreviewSurface:
    """Backdrop first, then poster, otherwise an empty surface."""

    src = image_url(item.backdrop_path, image_base_url) or image_url(
        item.poster_path, image_base_url
    )
    if src is None:
        return PreviewSurface(kind="empty")
    return PreviewSurface(kind="image", src=src)
