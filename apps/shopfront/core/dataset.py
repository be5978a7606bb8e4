"""Product model and helpers for loading catalog records into memory."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any, Iterable, List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator

_POSSIBLE_PATHS = [
    Path(__file__).resolve().parents[3] / "data" / "sample_products.json",
    Path(__file__).resolve().parents[2] / "data" / "sample_products.json",
]

PLACEHOLDER_MEDIA = "https://via.placeholder.com/400x400?text=No+Image"
VIDEO_EXTENSIONS = (".mp4", ".webm", ".mov")


def _find_catalog_path() -> Path:
    for p in _POSSIBLE_PATHS:
        if p.exists():
            return p
    # fall back to the first path which will raise a readable error on access
    return _POSSIBLE_PATHS[0]


CATALOG_PATH = _find_catalog_path()


class Product(BaseModel):
    """One catalog row, named after the store's columns."""

    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0)
    image_urls: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None
    categories: List[str] = Field(default_factory=list)
    is_featured: bool = False
    admin_notes: Optional[str] = None
    discount_percent: Optional[int] = None
    promotion_start: Optional[datetime] = None
    promotion_end: Optional[datetime] = None
    created_at: Optional[datetime] = None
    popularity_count: Optional[int] = Field(default=None, ge=0)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        # other floats are left for the str field to reject
        return value

    @field_validator("image_urls", "categories", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("is_featured", mode="before")
    @classmethod
    def _null_to_false(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("promotion_start", "promotion_end", "created_at")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def media(self) -> List[str]:
        """Gallery order; the first entry is the main item."""
        if self.image_urls:
            return list(self.image_urls)
        if self.image_url:
            return [self.image_url]
        return []

    @property
    def category_set(self) -> frozenset:
        return frozenset(self.categories)

    def display_categories(self) -> List[str]:
        # first occurrence wins, original order kept
        return list(dict.fromkeys(self.categories))


def is_video(uri: str) -> bool:
    """Return True when the URI points at a video rather than an image."""
    if not uri:
        return False
    path = urlparse(uri).path.lower() or uri.lower()
    return "/video/" in path or path.endswith(VIDEO_EXTENSIONS)


def parse_products(records: Iterable[Any]) -> List[Product]:
    """Validate raw records into products.

    Raises pydantic's ValidationError for a malformed record and ValueError for
    an id that appears twice.
    """
    products: List[Product] = []
    seen = set()
    for record in records:
        product = record if isinstance(record, Product) else Product.model_validate(record)
        if product.id in seen:
            raise ValueError(f"duplicate product id {product.id!r}")
        seen.add(product.id)
        products.append(product)
    return products


def read_catalog_file(path: Optional[Path] = None) -> List[dict]:
    """Read raw product records from a JSON array on disk."""
    data = json.loads(Path(path or CATALOG_PATH).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError("catalog file must contain a JSON array of products")
    return data
