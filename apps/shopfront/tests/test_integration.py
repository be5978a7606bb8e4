import pytest
from fastapi.testclient import TestClient

from shopfront.core.config import Settings
from shopfront.core.data_source import DataSourceError, StaticDataSource
from shopfront.main import create_app


class FlakySource(StaticDataSource):
    def __init__(self, records):
        super().__init__(records)
        self.fail = False

    def fetch_all(self):
        if self.fail:
            raise DataSourceError("Failed to fetch records")
        return super().fetch_all()


@pytest.fixture
def source(catalog_records):
    return FlakySource(catalog_records)


@pytest.fixture
def client(source):
    app = create_app(settings=Settings(), source=source)
    with TestClient(app) as test_client:
        yield test_client


def test_root_health(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "message" in r.json()
    assert client.get("/healthz").json() == {"status": "ok"}


def test_catalog_view_after_startup_load(client):
    r = client.get("/catalog")
    assert r.status_code == 200
    data = r.json()
    assert data["product_count"] == 4
    assert data["load_error"] is None
    assert [c["name"] for c in data["categories"]][:2] == ["kitchen", "ceramics"]


def test_search_waits_for_debounce_unless_immediate(client):
    data = client.post("/catalog/search", json={"text": "linen"}).json()
    assert data["search_text"] == ""
    data = client.post("/catalog/search", json={"text": "linen", "immediate": True}).json()
    assert data["search_text"] == "linen"
    assert [p["id"] for p in data["products"]] == ["towel"]


def test_category_toggle_and_clear(client):
    data = client.post("/catalog/categories/toggle", json={"name": "ceramics"}).json()
    assert [p["id"] for p in data["products"]] == ["mug", "vase"]
    data = client.post("/catalog/categories/toggle", json={"name": "decor", "selected": True}).json()
    assert [p["id"] for p in data["products"]] == ["vase"]
    data = client.post("/catalog/categories/clear").json()
    assert data["selected_categories"] == []
    assert data["product_count"] == 4


def test_category_list_filter(client):
    data = client.get("/catalog/categories", params={"q": "kit"}).json()
    assert data == [{"name": "kitchen", "count": 2, "selected": False}]
    view = client.get("/catalog").json()
    assert view["category_filter"] == ""
    assert len(view["categories"]) == 4


def test_category_filter_is_kept_for_the_session(client):
    data = client.post("/catalog/categories/filter", json={"text": "CER"}).json()
    assert data["category_filter"] == "CER"
    assert [c["name"] for c in data["categories"]] == ["ceramics"]
    assert [c["name"] for c in client.get("/catalog/categories").json()] == ["ceramics"]
    assert [c["name"] for c in client.get("/catalog").json()["categories"]] == ["ceramics"]


def test_sections_endpoint(client):
    data = client.get("/catalog/sections").json()
    assert [p["id"] for p in data["featured"]] == ["mug"]


def test_detail_flow_counts_popularity(client, source):
    data = client.post("/detail/open/mug").json()
    assert data["selection"] == {"open_product_id": "mug", "active_media_index": 0}
    assert data["detail"]["title"] == "Stoneware Mug"
    assert source.fetch_all()[0]["popularity_count"] == 1

    data = client.post("/detail/media/9").json()
    assert data["selection"]["active_media_index"] == 1
    assert data["detail"]["active_media"]["is_video"] is True

    data = client.post("/detail/close").json()
    assert data["detail"] is None
    assert client.get("/detail").json()["selection"]["open_product_id"] is None


def test_open_unknown_product_stays_closed(client, source):
    data = client.post("/detail/open/missing-id").json()
    assert data["selection"]["open_product_id"] is None
    assert all("popularity_count" not in r for r in source.fetch_all())


def test_reload_failure_keeps_catalog(client, source):
    source.fail = True
    r = client.post("/catalog/reload")
    assert r.status_code == 502
    assert r.json()["load_error"] == "Failed to fetch records"
    assert r.json()["product_count"] == 4

    source.fail = False
    r = client.post("/catalog/reload")
    assert r.status_code == 200
    assert r.json()["load_error"] is None
