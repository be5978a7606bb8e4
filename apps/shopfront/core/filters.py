"""Search and category filtering over the in-memory catalog."""

from __future__ import annotations

from typing import AbstractSet, Iterable, List

from .dataset import Product


def normalize_search(text: str) -> str:
    return (text or "").strip().lower()


def matches_categories(product: Product, required: AbstractSet[str]) -> bool:
    # exact labels, AND semantics
    if not required:
        return True
    return product.category_set.issuperset(required)


def matches_search(product: Product, term: str) -> bool:
    """``term`` must already be normalized."""
    if not term:
        return True
    title = (product.title or "").lower()
    description = (product.description or "").lower()
    return term in title or term in description


def visible_products(
    products: Iterable[Product],
    required_categories: AbstractSet[str],
    search_text: str,
) -> List[Product]:
    """Products carrying every required category and matching the search text.

    Input order is preserved.
    """
    term = normalize_search(search_text)
    required = frozenset(required_categories or ())
    return [
        product
        for product in products
        if matches_categories(product, required) and matches_search(product, term)
    ]
