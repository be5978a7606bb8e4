"""Turn products and browser state into the view-models in ``schemas``."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional

from ..schemas import CatalogSections, MediaItem, ProductCard, ProductDetail
from ..schemas import CategoryCount as CategoryCountView
from .catalog_index import CategoryCount
from .dataset import PLACEHOLDER_MEDIA, Product, is_video
from .detail_view import Selection
from .promotions import is_on_promotion, sale_price
from .sections import Sections


def format_price(value: Optional[Decimal]) -> Optional[str]:
    if value is None:
        return None
    return f"${value:.2f}"


def product_count_label(count: int) -> str:
    return f"{count} product{'' if count == 1 else 's'}"


def _media_item(url: str, active: bool = False) -> MediaItem:
    return MediaItem(url=url, is_video=is_video(url), active=active)


def _main_media(product: Product) -> MediaItem:
    media = product.media
    return _media_item(media[0] if media else PLACEHOLDER_MEDIA)


def product_to_card(product: Product, now: Optional[datetime] = None) -> ProductCard:
    on_sale = is_on_promotion(product, now)
    discounted = sale_price(product, now)
    return ProductCard(
        id=product.id,
        title=product.title or "",
        main_media=_main_media(product),
        media_count=len(product.media),
        price=product.price,
        sale_price=discounted,
        price_label=format_price(product.price),
        sale_price_label=format_price(discounted),
        on_sale=on_sale,
        discount_badge=f"-{product.discount_percent}%" if on_sale else None,
        is_featured=product.is_featured,
        categories=product.display_categories(),
    )


def cards(products: Iterable[Product], now: Optional[datetime] = None) -> List[ProductCard]:
    return [product_to_card(product, now) for product in products]


def sections_view(sections: Sections, now: Optional[datetime] = None) -> CatalogSections:
    def _maybe(products: Optional[List[Product]]) -> Optional[List[ProductCard]]:
        return cards(products, now) if products else None

    return CatalogSections(
        recent=_maybe(sections.recent),
        featured=_maybe(sections.featured),
        promotions=_maybe(sections.promotions),
    )


def category_views(entries: Iterable[CategoryCount], selected: Iterable[str]) -> List[CategoryCountView]:
    chosen = set(selected)
    return [
        CategoryCountView(name=entry.name, count=entry.count, selected=entry.name in chosen)
        for entry in entries
    ]


def product_detail(product: Product, selection: Selection, now: Optional[datetime] = None) -> ProductDetail:
    """Detail view-model for the open product.

    The active index is clamped again here because a reload may have shortened
    the product's gallery since the selection was made.
    """
    urls = product.media
    active = min(selection.active_media_index, len(urls) - 1) if urls else 0
    gallery = [_media_item(url, active=(idx == active)) for idx, url in enumerate(urls)]
    on_sale = is_on_promotion(product, now)
    discounted = sale_price(product, now)
    return ProductDetail(
        id=product.id,
        title=product.title or "",
        description=product.description or None,
        price=product.price,
        sale_price=discounted,
        price_label=format_price(product.price),
        sale_price_label=format_price(discounted),
        on_sale=on_sale,
        discount_badge=f"-{product.discount_percent}% OFF" if on_sale else None,
        promotion_ends=product.promotion_end.date() if on_sale else None,
        categories=product.display_categories(),
        admin_note=product.admin_notes or None,
        media=gallery,
        active_media_index=active,
        active_media=gallery[active] if gallery else _media_item(PLACEHOLDER_MEDIA, active=True),
    )
