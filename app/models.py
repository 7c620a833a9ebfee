"""Pydantic models shared by the dispatcher and the browse client."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Literal, Mapping

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

MediaKind = Literal["Trailer", "Teaser", "Clip", "Other"]

DISCOVER = "discover"
VIDEOS = "videos"
DETAILS = "movie"
QUERY_KIND_ALIASES: dict[str, str] = {"details": DETAILS}

DEFAULT_SORT_KEY = "popularity.desc"
DEFAULT_PAGE_LIMIT = 20

JSON_HEADERS: dict[str, str] = {"Content-Type": "application/json"}
CORS_HEADERS: dict[str, str] = {"Access-Control-Allow-Origin": "*"}


class TypedQuery(BaseModel):
    """One of the three request shapes accepted by the dispatcher."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    kind: str = Field(default=DISCOVER, alias="type")
    genre_id: str | None = Field(default=None, alias="genre")
    item_id: str | None = Field(default=None, alias="movieId")
    sort_key: str | None = Field(default=None, alias="sort_by")
    page_limit: int | None = Field(default=None, alias="limit")

    @field_validator("kind", mode="before")
    @classmethod
    def _normalise_kind(cls, value: object) -> str:
        text = str(value or "").strip().lower()
        if not text:
            return DISCOVER
        return QUERY_KIND_ALIASES.get(text, text)

    @field_validator("genre_id", "item_id", "sort_key", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @field_validator("page_limit", mode="before")
    @classmethod
    def _parse_limit(cls, value: object) -> int | None:
        try:
            limit = int(str(value).strip())
        except (TypeError, ValueError):
            return None
        return limit if limit > 0 else None

    @classmethod
    def from_query_params(cls, params: Mapping[str, str]) -> "TypedQuery":
        """Build a query from the dispatcher's query string."""

        fields = ("type", "genre", "movieId", "sort_by", "limit")
        return cls.model_validate(
            {name: params[name] for name in fields if name in params}
        )

    @property
    def resolved_sort_key(self) -> str:
        return self.sort_key or DEFAULT_SORT_KEY

    @property
    def resolved_page_limit(self) -> int:
        return self.page_limit or DEFAULT_PAGE_LIMIT


@dataclass(slots=True)
class ResponseEnvelope:
    """The only shape the dispatcher ever returns."""

    status_code: int
    body: str
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def json_response(
        cls,
        status_code: int,
        payload: Any,
        headers: Mapping[str, str] | None = None,
    ) -> "ResponseEnvelope":
        return cls(
            status_code=status_code,
            body=json.dumps(payload),
            headers=dict(headers or {}),
        )

    @classmethod
    def error(cls, status_code: int, message: str) -> "ResponseEnvelope":
        return cls.json_response(status_code, {"error": message}, JSON_HEADERS)

    def json(self) -> Any:
        """Decode the body; raises ``ValueError`` for pass-through text."""

        return json.loads(self.body)


class Item(BaseModel):
    """A movie as returned by TMDb; every field may be missing."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | str | None = None
    title: str | None = Field(
        default=None, validation_alias=AliasChoices("title", "name")
    )
    poster_path: str | None = None
    backdrop_path: str | None = None
    overview: str | None = None

    def display_title(self, fallback: str = "Untitled") -> str:
        title = (self.title or "").strip()
        return title or fallback


class PreviewMedia(BaseModel):
    """A single entry of a movie's video list."""

    model_config = ConfigDict(populate_by_name=True)

    site: str | None = None
    kind: MediaKind = Field(
        default="Other", validation_alias=AliasChoices("kind", "type")
    )
    key: str = ""

    @field_validator("kind", mode="before")
    @classmethod
    def _normalise_kind(cls, value: object) -> str:
        if value in ("Trailer", "Teaser", "Clip"):
            return str(value)
        return "Other"

    @field_validator("key", mode="before")
    @classmethod
    def _coerce_key(cls, value: object) -> str:
        return "" if value is None else str(value)


def parse_results(payload: Mapping[str, Any], model: type[BaseModel]) -> list[Any]:
    """Validate the ``results`` list of a TMDb payload, skipping bad entries."""

    raw_results = payload.get("results") or []
    if not isinstance(raw_results, list):
        return []
    parsed: list[Any] = []
    for entry in raw_results:
        if not isinstance(entry, dict):
            continue
        try:
            parsed.append(model.model_validate(entry))
        except ValidationError as exc:
            logger.debug("Skipping malformed %s entry: %s", model.__name__, exc)
    return parsed
