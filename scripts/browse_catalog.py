"""Browse the catalog from the command line.

Usage:
  python scripts/browse_catalog.py --search mug --category kitchen
  CATALOG_SOURCE=postgrest SUPABASE_URL=... SUPABASE_ANON_KEY=... python scripts/browse_catalog.py

Loads the catalog with the configured data source, applies the search text and
categories, and prints the visible products, the sections and (with --open)
one product's detail view.
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from dotenv import load_dotenv

from shopfront.core.browser import CatalogBrowser, SnapshotTarget
from shopfront.core.config import Settings
from shopfront.core.data_source import build_data_source
from shopfront.schemas import CatalogView


def _print_view(view: CatalogView) -> None:
    if view.load_error:
        print(f"Failed to load products: {view.load_error}")
    print(view.product_count_label)
    for card in view.products:
        price = card.sale_price_label or card.price_label or "-"
        badge = f" {card.discount_badge}" if card.discount_badge else ""
        print(f"  [{card.id}] {card.title} {price}{badge}")

    for name in ("recent", "featured", "promotions"):
        items = getattr(view.sections, name)
        if items:
            print(f"{name.title()}: {', '.join(card.title for card in items)}")

    print("Categories: " + ", ".join(f"{c.name} ({c.count})" for c in view.categories))

    if view.detail:
        detail = view.detail
        print(f"\n{detail.title}")
        if detail.description:
            print(detail.description)
        if detail.on_sale:
            print(f"{detail.price_label} -> {detail.sale_price_label} {detail.discount_badge}")
            print(f"Sale ends: {detail.promotion_ends}")
        elif detail.price_label:
            print(detail.price_label)
        for item in detail.media:
            marker = "*" if item.active else " "
            kind = "video" if item.is_video else "image"
            print(f" {marker} {kind}: {item.url}")
        if detail.admin_note:
            print(f"Note: {detail.admin_note}")


async def _run(args: argparse.Namespace) -> CatalogView:
    settings = Settings.from_env()
    target = SnapshotTarget()
    browser = CatalogBrowser(build_data_source(settings), target)
    try:
        await browser.load()
        for category in args.category:
            browser.toggle_category(category, True)
        browser.set_search_text(args.search)
        browser.apply_search()
        if args.category_filter:
            browser.filter_categories(args.category_filter)
        if args.open:
            browser.open_product(args.open)
            if args.media is not None:
                browser.select_media(args.media)
    finally:
        browser.shutdown()
    return target.view


def main() -> None:
    parser = argparse.ArgumentParser(description="Browse the product catalog")
    parser.add_argument("--search", default="", help="Text matched against titles and descriptions")
    parser.add_argument("--category", action="append", default=[], help="Required category (repeatable)")
    parser.add_argument("--category-filter", default="", help="Only list categories containing this text")
    parser.add_argument("--open", help="Product id to show in detail")
    parser.add_argument("--media", type=int, help="Gallery index to select in the detail view")
    args = parser.parse_args()

    load_dotenv()
    logging.basicConfig(level=logging.WARNING)
    _print_view(asyncio.run(_run(args)))


if __name__ == "__main__":
    main()
