"""Catalog bucket definitions shown as browse rows."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CatalogBucket:
    """Describes a fixed genre row in the browse view."""

    id: int
    display_name: str


CATALOG_BUCKETS: tuple[CatalogBucket, ...] = (
    CatalogBucket(id=878, display_name="AI"),
    CatalogBucket(id=528, display_name="Food"),
    CatalogBucket(id=18, display_name="Drama"),
    CatalogBucket(id=27, display_name="Horror"),
    CatalogBucket(id=35, display_name="Comedy"),
)
