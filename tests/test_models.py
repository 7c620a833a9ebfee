from __future__ import annotations

import pytest

from app.models import (
    DEFAULT_PAGE_LIMIT,
    DEFAULT_SORT_KEY,
    Item,
    PreviewMedia,
    ResponseEnvelope,
    TypedQuery,
    parse_results,
)


def test_typed_query_from_query_params_maps_wire_names() -> None:
    query = TypedQuery.from_query_params(
        {"type": "discover", "genre": "878", "limit": "5", "sort_by": "vote_average.desc"}
    )

    assert query.kind == "discover"
    assert query.genre_id == "878"
    assert query.page_limit == 5
    assert query.resolved_sort_key == "vote_average.desc"


def test_typed_query_defaults_to_discover() -> None:
    query = TypedQuery.from_query_params({})

    assert query.kind == "discover"
    assert query.genre_id is None
    assert query.resolved_sort_key == DEFAULT_SORT_KEY
    assert query.resolved_page_limit == DEFAULT_PAGE_LIMIT


def test_typed_query_accepts_details_alias_and_keeps_unknown_kinds() -> None:
    assert TypedQuery(kind="details", item_id="1").kind == "movie"
    assert TypedQuery(kind="Videos", item_id="1").kind == "videos"
    assert TypedQuery(kind="trending").kind == "trending"


@pytest.mark.parametrize("raw", ["abc", "0", "-4", ""])
def test_typed_query_invalid_limit_falls_back(raw: str) -> None:
    query = TypedQuery.from_query_params({"limit": raw})

    assert query.page_limit is None
    assert query.resolved_page_limit == DEFAULT_PAGE_LIMIT


def test_typed_query_blank_identifiers_are_missing() -> None:
    query = TypedQuery.from_query_params({"type": "videos", "movieId": "  "})

    assert query.item_id is None


def test_envelope_json_round_trips_payload() -> None:
    envelope = ResponseEnvelope.error(400, "movieId required")

    assert envelope.json() == {"error": "movieId required"}
    assert envelope.headers == {"Content-Type": "application/json"}


def test_item_accepts_partial_payloads_and_name_alias() -> None:
    item = Item.model_validate({"id": 7, "name": "Show Name"})

    assert item.display_title() == "Show Name"
    assert item.poster_path is None
    assert Item().display_title("Featured") == "Featured"


def test_preview_media_normalises_unknown_kinds() -> None:
    media = PreviewMedia.model_validate(
        {"site": "YouTube", "type": "Featurette", "key": "abc"}
    )

    assert media.kind == "Other"
    assert PreviewMedia(site="YouTube", kind="Clip").kind == "Clip"


def test_parse_results_skips_malformed_entries() -> None:
    payload = {"results": [{"id": 1, "title": "X"}, "junk", {"id": {"bad": 1}}]}

    items = parse_results(payload, Item)

    assert [item.id for item in items] == [1]
    assert parse_results({"results": "nope"}, Item) == []
    assert parse_results({}, Item) == []
