"""Authoritative in-memory product collection and its category index."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import Lock
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pydantic import ValidationError

from .data_source import DataSourceError
from .dataset import Product, parse_products

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryCount:
    name: str
    count: int


def count_categories(products: Iterable[Product]) -> List[CategoryCount]:
    """Count products per label, most common first.

    Ties keep the order in which labels were first seen.
    """
    totals: Dict[str, int] = {}
    for product in products:
        for label in product.display_categories():
            totals[label] = totals.get(label, 0) + 1
    ordered = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [CategoryCount(name=name, count=count) for name, count in ordered]


class CatalogIndex:
    """Owns the product collection.

    ``load`` validates the incoming records before swapping anything in, so a
    bad payload leaves the previous collection untouched. The swap and the
    category index rebuild happen under one lock; readers always see a
    collection and index built from the same load.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._products: Tuple[Product, ...] = ()
        self._by_id: Dict[str, Product] = {}
        self._categories: List[CategoryCount] = []
        self._version = 0

    def load(self, records: Iterable[Any]) -> None:
        try:
            products = parse_products(records)
        except (ValidationError, ValueError, TypeError) as exc:
            raise DataSourceError(f"Malformed product data: {exc}") from exc

        categories = count_categories(products)
        with self._lock:
            self._products = tuple(products)
            self._by_id = {product.id: product for product in products}
            self._categories = categories
            self._version += 1
        logger.info("Catalog loaded: %d products, %d categories", len(products), len(categories))

    @property
    def products(self) -> Tuple[Product, ...]:
        with self._lock:
            return self._products

    @property
    def version(self) -> int:
        """Bumped on every successful load; 0 means never loaded."""
        with self._lock:
            return self._version

    def get(self, product_id: Optional[str]) -> Optional[Product]:
        if product_id is None:
            return None
        with self._lock:
            return self._by_id.get(str(product_id))

    def __contains__(self, product_id: object) -> bool:
        with self._lock:
            return str(product_id) in self._by_id

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    def category_counts(self, filter_substring: Optional[str] = None) -> List[CategoryCount]:
        """Category index, optionally narrowed to labels containing a substring."""
        with self._lock:
            categories = list(self._categories)
        term = (filter_substring or "").strip().lower()
        if not term:
            return categories
        return [entry for entry in categories if term in entry.name.lower()]
