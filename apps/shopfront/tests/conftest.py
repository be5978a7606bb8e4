"""Shared fixtures: a fixed clock and a small catalog built around it."""

from datetime import datetime, timedelta, timezone

import pytest

NOW = datetime(2026, 10, 16, 12, 0, tzinfo=timezone.utc)


def _iso(delta: timedelta) -> str:
    return (NOW + delta).isoformat()


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def catalog_records():
    return [
        {
            "id": "mug",
            "title": "Stoneware Mug",
            "description": "Speckled glaze, holds 350 ml.",
            "price": 100,
            "image_urls": [
                "https://cdn.example.com/image/upload/mug-front.jpg",
                "https://cdn.example.com/video/upload/mug-spin.mp4",
            ],
            "categories": ["kitchen", "ceramics"],
            "is_featured": True,
            "admin_notes": "Fragile, pack with care.",
            "discount_percent": 20,
            "promotion_start": _iso(-timedelta(days=1)),
            "promotion_end": _iso(timedelta(days=1)),
            "created_at": _iso(-timedelta(days=2)),
        },
        {
            "id": "towel",
            "title": "Linen Tea Towel",
            "description": "Stonewashed linen in oat.",
            "price": 12.5,
            "image_urls": [],
            "categories": ["kitchen", "textiles"],
            "is_featured": False,
            "created_at": _iso(-timedelta(days=10)),
        },
        {
            "id": "vase",
            "title": "Bud Vase",
            "description": None,
            "price": 19,
            "image_url": "https://cdn.example.com/image/upload/vase.jpg",
            "categories": ["ceramics", "decor"],
            "discount_percent": 0,
            "promotion_end": _iso(timedelta(days=3)),
            "created_at": _iso(-timedelta(days=1)),
        },
        {
            "id": "card",
            "title": "Gift Card",
            "categories": None,
        },
    ]
