"""Discount window evaluation for products."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from .dataset import Product

_EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)


def resolve_now(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def is_on_promotion(product: Product, now: Optional[datetime] = None) -> bool:
    """True when the product's discount is active at ``now``.

    A discount needs a positive percentage (at most 100) and an end date; a
    missing start date means the window has no lower bound.
    """
    percent = product.discount_percent
    if percent is None or percent <= 0 or percent > 100:
        return False
    if product.promotion_end is None:
        return False
    current = resolve_now(now)
    start = product.promotion_start or _EPOCH
    return start <= current <= product.promotion_end


def sale_price(product: Product, now: Optional[datetime] = None) -> Optional[Decimal]:
    if product.price is None or not is_on_promotion(product, now):
        return None
    return product.price * (1 - Decimal(product.discount_percent) / 100)
