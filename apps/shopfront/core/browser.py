"""The catalog browser controller.

``CatalogBrowser`` is the one object that holds browsing state: the catalog
index, the applied search text, the selected categories, the category-list
filter and the detail view. Every state change ends with a fresh
``CatalogView`` pushed to the rendering target. Methods are meant to be called
from a single event-loop thread; the only blocking work (fetching the catalog
and bumping popularity counters) runs off that thread.
"""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from functools import partial
from typing import Callable, Dict, List, Optional, Protocol

from ..schemas import CatalogView, SelectionState
from ..schemas import CategoryCount as CategoryCountView
from . import presenter
from .catalog_index import CatalogIndex
from .data_source import CatalogDataSource, DataSourceError
from .dataset import Product
from .debounce import Debouncer
from .detail_view import DetailView, Selection
from .filters import visible_products
from .sections import Sections, select_sections

logger = logging.getLogger(__name__)

Dispatch = Callable[[Callable[[], None]], object]


class RenderingTarget(Protocol):
    def render(self, view: CatalogView) -> None:
        ...


class SnapshotTarget:
    """Keeps the most recent view so callers can read it back."""

    def __init__(self) -> None:
        self.view: Optional[CatalogView] = None
        self.renders = 0

    def render(self, view: CatalogView) -> None:
        self.view = view
        self.renders += 1


class CatalogBrowser:
    def __init__(
        self,
        source: CatalogDataSource,
        target: Optional[RenderingTarget] = None,
        *,
        debounce_seconds: float = 0.3,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.source = source
        self.target = target or SnapshotTarget()
        self.index = CatalogIndex()
        self.detail = DetailView(self.index.get)
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._debouncer = Debouncer(debounce_seconds)
        self._search_input = ""
        self._search_text = ""
        # dict keeps toggle order for display
        self._selected: Dict[str, None] = {}
        self._category_filter = ""
        self._loading = False
        self._load_error: Optional[str] = None
        self._sections: Optional[Sections] = None
        self._sections_version = -1
        self._executor: Optional[ThreadPoolExecutor] = None

    # --- state accessors ----------------------------------------------------

    @property
    def search_text(self) -> str:
        return self._search_text

    @property
    def selected_categories(self) -> List[str]:
        return list(self._selected)

    @property
    def selection(self) -> Selection:
        return self.detail.selection

    @property
    def load_error(self) -> Optional[str]:
        return self._load_error

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def search_pending(self) -> bool:
        return self._debouncer.pending

    # --- loading ------------------------------------------------------------

    async def load(self) -> bool:
        """Fetch the full catalog and swap it in.

        On failure the previous collection stays browsable and the error is
        reported through the view. Returns whether the load succeeded.
        """
        self._loading = True
        self.render()
        try:
            records = await asyncio.to_thread(self.source.fetch_all)
            self.index.load(records)
        except DataSourceError as exc:
            logger.warning("Catalog load failed: %s", exc)
            self._load_error = str(exc)
            ok = False
        else:
            self._load_error = None
            self._drop_missing_selection()
            ok = True
        finally:
            self._loading = False
        self.render()
        return ok

    def _drop_missing_selection(self) -> None:
        selection = self.detail.selection
        if selection.is_open and selection.open_product_id not in self.index:
            logger.info("Open product %s is gone after reload, closing detail view", selection.open_product_id)
            self.detail.close()

    # --- search and categories ----------------------------------------------

    def set_search_text(self, text: str) -> None:
        """Record typed text; it is applied once typing settles."""
        self._search_input = text or ""
        try:
            self._debouncer.schedule(self._apply_search)
        except RuntimeError:
            # no running loop, nothing to debounce against
            self._apply_search()

    def apply_search(self) -> None:
        """Apply the typed text now instead of waiting for the debounce timer."""
        if not self._debouncer.flush():
            self._apply_search()

    def _apply_search(self) -> None:
        self._search_text = self._search_input
        self.render()

    def toggle_category(self, name: str, selected: Optional[bool] = None) -> None:
        if selected is None:
            selected = name not in self._selected
        if selected:
            self._selected.setdefault(name, None)
        else:
            self._selected.pop(name, None)
        self.render()

    def clear_categories(self) -> None:
        self._selected.clear()
        self.render()

    def filter_categories(self, text: str) -> None:
        self._category_filter = text or ""
        self.render()

    # --- detail view --------------------------------------------------------

    def open_product(self, product_id: str, dispatch: Optional[Dispatch] = None) -> bool:
        """Open a product's detail view and record the view with the data source.

        The increment is handed to ``dispatch`` (a background worker by
        default) and never awaited; its failure is only logged.
        """
        opened = self.detail.open(product_id)
        if opened:
            self._dispatch_increment(self.detail.selection.open_product_id, dispatch)
        self.render()
        return opened

    def select_media(self, index: int) -> bool:
        changed = self.detail.select_media(index)
        self.render()
        return changed

    def close_detail(self) -> None:
        self.detail.close()
        self.render()

    def _dispatch_increment(self, product_id: str, dispatch: Optional[Dispatch]) -> None:
        task = partial(self._increment_popularity, product_id)
        try:
            (dispatch or self._submit)(task)
        except Exception:
            logger.exception("Could not dispatch popularity increment for %s", product_id)

    def _submit(self, task: Callable[[], None]) -> None:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="popularity")
        self._executor.submit(task)

    def _increment_popularity(self, product_id: str) -> None:
        try:
            self.source.increment_popularity(product_id)
        except DataSourceError as exc:
            logger.warning("Popularity increment failed for %s: %s", product_id, exc)
        except Exception:
            logger.exception("Unexpected error incrementing popularity for %s", product_id)

    def shutdown(self, wait: bool = True) -> None:
        self._debouncer.cancel()
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
            self._executor = None

    # --- queries ------------------------------------------------------------

    def visible(self) -> List[Product]:
        return visible_products(self.index.products, set(self._selected), self._search_text)

    def categories(self, filter_text: Optional[str] = None) -> List[CategoryCountView]:
        """Category list with counts; ``filter_text`` overrides the stored filter for this call only."""
        text = self._category_filter if filter_text is None else filter_text
        return presenter.category_views(self.index.category_counts(text), self._selected)

    def sections(self) -> Sections:
        version = self.index.version
        if self._sections is None or self._sections_version != version:
            self._sections = select_sections(self.index.products, self._clock())
            self._sections_version = version
        return self._sections

    def view(self, now: Optional[datetime] = None) -> CatalogView:
        now = now or self._clock()
        visible = self.visible()
        selection = self.detail.selection
        product = self.detail.product
        detail = presenter.product_detail(product, selection, now) if product else None
        return CatalogView(
            products=presenter.cards(visible, now),
            product_count=len(visible),
            product_count_label=presenter.product_count_label(len(visible)),
            search_text=self._search_text,
            selected_categories=self.selected_categories,
            category_filter=self._category_filter,
            categories=self.categories(),
            sections=presenter.sections_view(self.sections(), now),
            selection=SelectionState(
                open_product_id=selection.open_product_id,
                active_media_index=detail.active_media_index if detail else selection.active_media_index,
            ),
            detail=detail,
            loading=self._loading,
            load_error=self._load_error,
        )

    def render(self) -> CatalogView:
        view = self.view()
        self.target.render(view)
        return view
