from datetime import timedelta

from shopfront.core.dataset import Product
from shopfront.core.sections import featured_products, promotion_products, recent_products, select_sections


def test_recent_excludes_products_older_than_a_week(now):
    products = [
        Product(id=1, created_at=now - timedelta(days=2)),
        Product(id=2, created_at=now - timedelta(days=10)),
    ]
    assert [p.id for p in recent_products(products, now)] == ["1"]


def test_recent_is_newest_first_and_capped_at_eight(now):
    products = [Product(id=f"p{i}", created_at=now - timedelta(hours=i)) for i in range(10)]
    recent = recent_products(list(reversed(products)), now)
    assert [p.id for p in recent] == [f"p{i}" for i in range(8)]


def test_recent_ignores_products_without_created_at(now):
    products = [Product(id="a"), Product(id="b", created_at=now - timedelta(days=1))]
    assert [p.id for p in recent_products(products, now)] == ["b"]


def test_empty_sections_are_suppressed(now):
    products = [Product(id="old", created_at=now - timedelta(days=30))]
    sections = select_sections(products, now)
    assert sections.recent is None
    assert sections.featured is None
    assert sections.promotions is None


def test_featured_keeps_every_flagged_product(now):
    products = [Product(id=f"f{i}", is_featured=True) for i in range(12)] + [Product(id="plain")]
    assert len(featured_products(products)) == 12


def test_sections_from_catalog(catalog_records, now):
    products = [Product(**record) for record in catalog_records]
    sections = select_sections(products, now)
    assert [p.id for p in sections.recent] == ["vase", "mug"]
    assert [p.id for p in sections.featured] == ["mug"]
    assert [p.id for p in sections.promotions] == ["mug"]
    assert promotion_products(products, now + timedelta(days=5)) is None
