"""Single-product detail view: which product is open and which media item is shown."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .dataset import Product

logger = logging.getLogger(__name__)

ProductLookup = Callable[[str], Optional[Product]]


@dataclass(frozen=True)
class Selection:
    open_product_id: Optional[str] = None
    active_media_index: int = 0

    @property
    def is_open(self) -> bool:
        return self.open_product_id is not None


CLOSED = Selection()


class DetailView:
    """State machine with two states, ``Closed`` and ``Open(product, media)``.

    Products are referenced by id only and looked up through ``lookup`` each
    time, so the view never holds a stale copy of a product.
    """

    def __init__(self, lookup: ProductLookup) -> None:
        self._lookup = lookup
        self._selection = CLOSED

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def product(self) -> Optional[Product]:
        if not self._selection.is_open:
            return None
        return self._lookup(self._selection.open_product_id)

    def open(self, product_id: str) -> bool:
        product = self._lookup(product_id)
        if product is None:
            logger.debug("Ignoring open for unknown product %s", product_id)
            return False
        self._selection = Selection(open_product_id=product.id, active_media_index=0)
        return True

    def select_media(self, index: int) -> bool:
        product = self.product
        if product is None:
            return False
        media_count = len(product.media)
        if media_count == 0:
            return False
        clamped = max(0, min(int(index), media_count - 1))
        self._selection = Selection(open_product_id=product.id, active_media_index=clamped)
        return True

    def close(self) -> None:
        self._selection = CLOSED
