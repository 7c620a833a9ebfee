"""Application configuration models."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Iterable, Literal

from pydantic import Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .genres import CATALOG_BUCKETS, CatalogBucket


DEFAULT_GENRE_IDS: tuple[int, ...] = tuple(bucket.id for bucket in CATALOG_BUCKETS)


class Settings(BaseSettings):
    """Settings loaded from environment variables or a .env file."""

    app_name: str = Field(default="Trailerflix", alias="APP_NAME")
    server_host: str = Field(default="0.0.0.0", alias="HOST")
    server_port: int = Field(default=3000, alias="PORT")

    tmdb_api_key: str | None = Field(default=None, alias="TMDB_API_KEY")
    tmdb_api_url: HttpUrl = Field(
        default="https://api.themoviedb.org/3", alias="TMDB_API_URL"
    )
    tmdb_image_base_url: str = Field(
        default="https://image.tmdb.org/t/p/w500", alias="TMDB_IMAGE_BASE_URL"
    )
    upstream_timeout_seconds: float = Field(
        default=10.0, alias="UPSTREAM_TIMEOUT", gt=0, le=120
    )

    dispatcher_path: str = Field(default="/api/tmdb", alias="DISPATCHER_PATH")
    dispatcher_url: HttpUrl = Field(
        default="http://localhost:3000", alias="DISPATCHER_URL"
    )

    preview_delay_ms: int = Field(
        default=350, alias="PREVIEW_DELAY_MS", ge=0, le=10_000
    )
    row_page_limit: int = Field(default=20, alias="ROW_PAGE_LIMIT", ge=1, le=100)
    featured_page_limit: int = Field(
        default=10, alias="FEATURED_PAGE_LIMIT", ge=1, le=100
    )

    catalog_genres: Annotated[tuple[int, ...], NoDecode] = Field(
        default=DEFAULT_GENRE_IDS,
        alias="CATALOG_GENRES",
    )

    environment: Literal["development", "production"] = Field(
        default="development", alias="ENVIRONMENT"
    )

    @field_validator("catalog_genres", mode="before")
    @classmethod
    def _parse_catalog_genres(cls, value: object) -> tuple[int, ...]:
        """Normalise genre selections from environment values."""

        if value is None:
            return DEFAULT_GENRE_IDS
        if isinstance(value, str):
            raw_values = [part.strip() for part in value.split(",")]
        elif isinstance(value, Iterable):
            raw_values = [str(part).strip() for part in value]
        else:
            raise TypeError("CATALOG_GENRES must be a string or iterable of ids")

        cleaned: list[int] = []
        for entry in raw_values:
            if not entry:
                continue
            try:
                genre_id = int(entry)
            except ValueError as exc:
                raise ValueError("Unknown catalog genres configured") from exc
            if genre_id not in DEFAULT_GENRE_IDS:
                raise ValueError("Unknown catalog genres configured")
            if genre_id not in cleaned:
                cleaned.append(genre_id)
        if not cleaned:
            return DEFAULT_GENRE_IDS
        return tuple(cleaned)

    @field_validator("dispatcher_path")
    @classmethod
    def _normalise_dispatcher_path(cls, value: str) -> str:
        path = "/" + value.strip().strip("/")
        if path == "/":
            raise ValueError("DISPATCHER_PATH must not be empty")
        return path

    @property
    def catalog_buckets(self) -> tuple[CatalogBucket, ...]:
        """Return the configured buckets in declared order."""

        bucket_map = {bucket.id: bucket for bucket in CATALOG_BUCKETS}
        return tuple(bucket_map[genre_id] for genre_id in self.catalog_genres)

    @property
    def preview_delay_seconds(self) -> float:
        return self.preview_delay_ms / 1000

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()  # type: ignore[call-arg]


settings = get_settings()
