"""Derived homepage sections: recently added, featured and on promotion.

Each selector works on the full collection, independent of search and
category state. An empty selection is reported as ``None`` so callers can
suppress the section entirely.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from .dataset import Product
from .promotions import is_on_promotion, resolve_now

RECENT_WINDOW = timedelta(days=7)
RECENT_LIMIT = 8


@dataclass(frozen=True)
class Sections:
    recent: Optional[List[Product]]
    featured: Optional[List[Product]]
    promotions: Optional[List[Product]]


def _or_none(items: List[Product]) -> Optional[List[Product]]:
    return items or None


def recent_products(
    products: Sequence[Product],
    now: Optional[datetime] = None,
    *,
    window: timedelta = RECENT_WINDOW,
    limit: int = RECENT_LIMIT,
) -> Optional[List[Product]]:
    current = resolve_now(now)
    cutoff = current - window
    recent = [p for p in products if p.created_at is not None and p.created_at >= cutoff]
    recent.sort(key=lambda p: p.created_at, reverse=True)
    return _or_none(recent[:limit])


def featured_products(products: Sequence[Product]) -> Optional[List[Product]]:
    return _or_none([p for p in products if p.is_featured])


def promotion_products(products: Sequence[Product], now: Optional[datetime] = None) -> Optional[List[Product]]:
    return _or_none([p for p in products if is_on_promotion(p, now)])


def select_sections(products: Sequence[Product], now: Optional[datetime] = None) -> Sections:
    current = resolve_now(now)
    return Sections(
        recent=recent_products(products, current),
        featured=featured_products(products),
        promotions=promotion_products(products, current),
    )
