"""Row loading isolation and hero banner behaviour."""

from __future__ import annotations

import asyncio

import pytest

from app.client.hero import HeroController
from app.client.rows import RowLoader
from app.client.views import BrowseView, CardView, HeroView
from app.genres import CatalogBucket
from app.models import Item

from stubs import StubDispatcherClient, youtube

IMAGE_BASE = "https://images.example.com/w500"
BUCKETS = (
    CatalogBucket(id=1, display_name="Alpha"),
    CatalogBucket(id=2, display_name="Beta"),
    CatalogBucket(id=3, display_name="Gamma"),
)


@pytest.mark.anyio("asyncio")
async def test_failed_bucket_only_affects_its_own_row() -> None:
    client = StubDispatcherClient(
        rows={
            1: [Item(id=10, title="A1"), Item(id=11, title="A2")],
            3: [Item(id=30, title="C1")],
        },
        failing_ids={2},
    )
    registered: list[CardView] = []
    loader = RowLoader(client, page_limit=20, on_card=registered.append)
    view = BrowseView()

    tracks = await loader.load(BUCKETS, view)

    assert [track.bucket.display_name for track in view.rows] == ["Alpha", "Beta", "Gamma"]
    alpha, beta, gamma = tracks
    assert [card.title for card in alpha.cards] == ["A1", "A2"]
    assert alpha.message is None
    assert beta.cards == []
    assert beta.message == "Failed to load Beta"
    assert [card.title for card in gamma.cards] == ["C1"]
    assert all(not track.loading for track in tracks)
    assert [card.card_id for card in registered] == ["1:0:10", "1:1:11", "3:0:30"]
    assert {call["limit"] for call in client.discover_calls} == {20}


@pytest.mark.anyio("asyncio")
async def test_same_movie_in_two_rows_gets_distinct_cards() -> None:
    movie = Item(id=5, title="Shared")
    client = StubDispatcherClient(rows={1: [movie], 2: [movie]})
    view = BrowseView()

    await RowLoader(client).load(BUCKETS[:2], view)

    assert set(view.cards()) == {"1:0:5", "2:0:5"}


@pytest.mark.anyio("asyncio")
async def test_hero_mounts_trailer_with_controls() -> None:
    client = StubDispatcherClient(media={7: [youtube("Clip", "c"), youtube("Trailer", "t")]})
    hero = HeroController(client, HeroView(), image_base_url=IMAGE_BASE)

    assert await hero.show(Item(id=7, title="Seven", overview="Plot")) is True

    assert hero.view.title == "Seven"
    assert hero.view.overview == "Plot"
    assert hero.view.media is not None
    assert hero.view.media.kind == "video"
    assert hero.view.media.src is not None
    assert "/embed/t?" in hero.view.media.src
    assert "controls=1" in hero.view.media.src


@pytest.mark.anyio("asyncio")
@pytest.mark.parametrize(
    ("item", "expected_kind", "expected_src"),
    [
        (Item(id=1, backdrop_path="/back.jpg", poster_path="/post.jpg"), "image", f"{IMAGE_BASE}/back.jpg"),
        (Item(id=1, poster_path="/post.jpg"), "image", f"{IMAGE_BASE}/post.jpg"),
        (Item(id=1), "empty", None),
    ],
)
async def test_hero_static_fallback_order(item: Item, expected_kind: str, expected_src: str | None) -> None:
    client = StubDispatcherClient(media={1: [youtube("Clip", "only-clip")]})
    hero = HeroController(client, HeroView(), image_base_url=IMAGE_BASE)

    await hero.show(item)

    assert hero.view.title == "Featured"
    assert hero.view.media is not None
    assert hero.view.media.kind == expected_kind
    assert hero.view.media.src == expected_src


@pytest.mark.anyio("asyncio")
async def test_hero_fetch_failure_uses_static_fallback() -> None:
    client = StubDispatcherClient(failing_ids={4})
    hero = HeroController(client, HeroView(), image_base_url=IMAGE_BASE)

    await hero.show(Item(id=4, title="Four", poster_path="/four.jpg"))

    assert hero.view.media is not None
    assert hero.view.media.src == f"{IMAGE_BASE}/four.jpg"


@pytest.mark.anyio("asyncio")
async def test_hero_discards_superseded_selection() -> None:
    gate = asyncio.Event()

    class SlowFirstClient(StubDispatcherClient):
        async def videos(self, item_id):  # type: ignore[override]
            self.video_calls.append(item_id)
            if item_id == 1:
                await gate.wait()
            return list(self.media.get(item_id, []))

    client = SlowFirstClient(
        media={1: [youtube("Trailer", "old")], 2: [youtube("Trailer", "new")]}
    )
    hero = HeroController(client, HeroView(), image_base_url=IMAGE_BASE)

    first = asyncio.create_task(hero.show(Item(id=1, title="Old")))
    await asyncio.sleep(0)
    assert await hero.show(Item(id=2, title="New")) is True
    gate.set()

    assert await first is False
    assert hero.view.title == "New"
    assert hero.view.media is not None
    assert hero.view.media.src is not None
    assert "/embed/new?" in hero.view.media.src
