"""Validate a catalog JSON file against the product model.

Prints the number of products, the category index and the derived sections so
a catalog export can be checked before it is published to the store.

Usage (from the repository root, with the package installed):
  python scripts/validate_catalog.py data/sample_products.json
"""

from __future__ import annotations

import argparse
from pathlib import Path

from shopfront.core.catalog_index import CatalogIndex
from shopfront.core.data_source import DataSourceError
from shopfront.core.dataset import CATALOG_PATH, read_catalog_file
from shopfront.core.sections import select_sections


def main() -> None:
    parser = argparse.ArgumentParser(description="Validate a product catalog file")
    parser.add_argument("catalog", type=Path, nargs="?", default=CATALOG_PATH, help="Path to catalog JSON")
    args = parser.parse_args()

    if args.catalog.suffix != ".json":
        raise SystemExit("Catalog must be a JSON file")

    index = CatalogIndex()
    try:
        index.load(read_catalog_file(args.catalog))
    except (OSError, ValueError, DataSourceError) as exc:
        raise SystemExit(f"Invalid catalog {args.catalog}: {exc}")

    print(f"Loaded {len(index)} products.")
    for entry in index.category_counts():
        print(f"  {entry.name}: {entry.count}")

    sections = select_sections(index.products)
    for name in ("recent", "featured", "promotions"):
        items = getattr(sections, name)
        print(f"{name}: {', '.join(p.id for p in items) if items else '(hidden)'}")


if __name__ == "__main__":
    main()
