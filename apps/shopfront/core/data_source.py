"""Catalog data sources: where product records come from.

The browser only needs three calls: fetch the whole table, fetch rows that
carry every one of a set of category labels, and bump a product's popularity
counter. ``PostgrestDataSource`` talks to a PostgREST/Supabase table over
HTTP; ``StaticDataSource`` and ``JsonFileDataSource`` serve records from
memory or disk for local development and tests.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence

import requests

logger = logging.getLogger(__name__)


class DataSourceError(Exception):
    """A fetch or increment against the catalog store failed."""


class CatalogDataSource(Protocol):
    def fetch_all(self) -> List[Dict[str, Any]]:
        ...

    def fetch_by_category_labels(self, labels: Sequence[str]) -> List[Dict[str, Any]]:
        ...

    def increment_popularity(self, product_id: str) -> None:
        ...


def _category_literal(labels: Iterable[str]) -> str:
    quoted = []
    for label in labels:
        escaped = str(label).replace("\\", "\\\\").replace('"', '\\"')
        quoted.append(f'"{escaped}"')
    return "{" + ",".join(quoted) + "}"


class PostgrestDataSource:
    """Read-only access to a products table exposed through PostgREST."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        table: str = "products",
        *,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not table:
            raise ValueError("Table name is required")
        self.table = table
        self.base_url = base_url.rstrip("/") + "/rest/v1"
        self.timeout = timeout
        self._session = session or requests.Session()
        self._headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    def _request(self, method: str, path: str, *, what: str, **kwargs) -> Any:
        url = f"{self.base_url}/{path}"
        try:
            resp = self._session.request(method, url, headers=self._headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise DataSourceError(f"{what}: {exc}") from exc

        if not resp.ok:
            message = None
            try:
                body = resp.json()
                if isinstance(body, dict):
                    message = body.get("message")
            except ValueError:
                pass
            raise DataSourceError(message or f"{what} (HTTP {resp.status_code})")

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise DataSourceError(f"{what}: response was not JSON") from exc

    def _select(self, params: Dict[str, str], *, what: str) -> List[Dict[str, Any]]:
        rows = self._request("GET", self.table, what=what, params={"select": "*", **params})
        if not isinstance(rows, list):
            raise DataSourceError(f"{what}: expected a list of rows")
        return rows

    def fetch_all(self) -> List[Dict[str, Any]]:
        return self._select({}, what="Failed to fetch records")

    def fetch_by_category_labels(self, labels: Sequence[str]) -> List[Dict[str, Any]]:
        if not labels:
            return self.fetch_all()
        # array "contains" operator gives AND semantics
        return self._select(
            {"categories": f"cs.{_category_literal(labels)}"},
            what="Failed to fetch products by categories",
        )

    def increment_popularity(self, product_id: str) -> None:
        self._request(
            "POST",
            "rpc/increment_popularity",
            what="Failed to increment popularity",
            json={"product_id": product_id},
        )


class StaticDataSource:
    """Serves a fixed list of records held in memory.

    Popularity increments are kept as a per-id tally and added onto the
    stored ``popularity_count`` whenever rows are handed out.
    """

    def __init__(self, records: Iterable[Dict[str, Any]]) -> None:
        self._records: List[Dict[str, Any]] = [dict(record) for record in records]
        self._views: Dict[str, int] = {}

    def _rows(self) -> List[Dict[str, Any]]:
        return self._records

    def _with_views(self, record: Dict[str, Any]) -> Dict[str, Any]:
        row = dict(record)
        extra = self._views.get(str(row.get("id")))
        if extra:
            row["popularity_count"] = (row.get("popularity_count") or 0) + extra
        return row

    def fetch_all(self) -> List[Dict[str, Any]]:
        return [self._with_views(record) for record in self._rows()]

    def fetch_by_category_labels(self, labels: Sequence[str]) -> List[Dict[str, Any]]:
        required = set(labels)
        return [
            self._with_views(record)
            for record in self._rows()
            if required.issubset(record.get("categories") or [])
        ]

    def increment_popularity(self, product_id: str) -> None:
        key = str(product_id)
        if not any(str(record.get("id")) == key for record in self._rows()):
            raise DataSourceError(f"Unknown product {product_id!r}")
        self._views[key] = self._views.get(key, 0) + 1


class JsonFileDataSource(StaticDataSource):
    """Records re-read from a JSON file on every fetch; counters live in memory only."""

    def __init__(self, path: Path) -> None:
        super().__init__([])
        self.path = Path(path)

    def _rows(self) -> List[Dict[str, Any]]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise DataSourceError(f"Failed to read catalog file {self.path}: {exc}") from exc
        if not isinstance(data, list) or not all(isinstance(row, dict) for row in data):
            raise DataSourceError(f"Catalog file {self.path} must contain a JSON array of objects")
        logger.debug("Read %d catalog records from %s", len(data), self.path)
        return data


def build_data_source(settings) -> CatalogDataSource:
    """Pick the data source named by ``settings.catalog_source``."""
    if settings.catalog_source == "postgrest":
        return PostgrestDataSource(
            settings.supabase_url,
            settings.supabase_anon_key,
            settings.catalog_table,
            timeout=settings.request_timeout,
        )
    return JsonFileDataSource(settings.catalog_path)
