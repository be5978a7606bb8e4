from shopfront.core.dataset import Product
from shopfront.core.filters import visible_products


def _products(records):
    return [Product(**record) for record in records]


def _ids(products):
    return [p.id for p in products]


def test_no_constraints_returns_everything_in_order(catalog_records):
    products = _products(catalog_records)
    assert visible_products(products, set(), "") == products


def test_categories_are_and_combined(catalog_records):
    products = _products(catalog_records)
    assert _ids(visible_products(products, {"kitchen"}, "")) == ["mug", "towel"]
    assert _ids(visible_products(products, {"kitchen", "ceramics"}, "")) == ["mug"]
    assert visible_products(products, {"kitchen", "decor"}, "") == []


def test_category_match_is_exact_not_prefix(catalog_records):
    products = _products(catalog_records)
    assert visible_products(products, {"kitch"}, "") == []
    assert visible_products(products, {"Kitchen"}, "") == []


def test_search_matches_title_or_description_case_insensitively(catalog_records):
    products = _products(catalog_records)
    assert _ids(visible_products(products, set(), "MUG")) == ["mug"]
    assert _ids(visible_products(products, set(), "stonewashed")) == ["towel"]
    assert _ids(visible_products(products, set(), "stone")) == ["mug", "towel"]


def test_whitespace_only_search_is_empty(catalog_records):
    products = _products(catalog_records)
    assert visible_products(products, set(), "   ") == products
    assert _ids(visible_products(products, set(), "  vase ")) == ["vase"]


def test_search_and_categories_combine(catalog_records):
    products = _products(catalog_records)
    assert _ids(visible_products(products, {"ceramics"}, "stone")) == ["mug"]
    assert visible_products(products, {"decor"}, "linen") == []


def test_products_without_text_or_categories_do_not_break_matching():
    products = [Product(id="bare")]
    assert visible_products(products, set(), "anything") == []
    assert visible_products(products, {"kitchen"}, "") == []
    assert _ids(visible_products(products, set(), "")) == ["bare"]
