"""Catalog browsing endpoints: the visible grid, search, categories and sections.

Handlers are ``async`` so every browser mutation runs on the event loop
thread; the debounced search timer lives on that same loop.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..core.browser import CatalogBrowser
from ..schemas import CatalogSections, CatalogView, CategoryCount, CategoryFilter, CategoryToggle, SearchUpdate

router = APIRouter()


def get_browser(request: Request) -> CatalogBrowser:
    return request.app.state.browser


@router.get("", response_model=CatalogView)
async def current_view(browser: CatalogBrowser = Depends(get_browser)) -> CatalogView:
    return browser.view()


@router.post("/search", response_model=CatalogView)
async def update_search(request: SearchUpdate, browser: CatalogBrowser = Depends(get_browser)) -> CatalogView:
    browser.set_search_text(request.text)
    if request.immediate:
        browser.apply_search()
    return browser.view()


@router.post("/categories/toggle", response_model=CatalogView)
async def toggle_category(request: CategoryToggle, browser: CatalogBrowser = Depends(get_browser)) -> CatalogView:
    browser.toggle_category(request.name, request.selected)
    return browser.view()


@router.post("/categories/clear", response_model=CatalogView)
async def clear_categories(browser: CatalogBrowser = Depends(get_browser)) -> CatalogView:
    browser.clear_categories()
    return browser.view()


@router.get("/categories", response_model=List[CategoryCount])
async def list_categories(q: Optional[str] = None, browser: CatalogBrowser = Depends(get_browser)) -> List[CategoryCount]:
    """Counts filtered by ``q`` for this request only; without ``q`` the session filter applies."""
    return browser.categories(q)


@router.post("/categories/filter", response_model=CatalogView)
async def filter_categories(request: CategoryFilter, browser: CatalogBrowser = Depends(get_browser)) -> CatalogView:
    browser.filter_categories(request.text)
    return browser.view()


@router.get("/sections", response_model=CatalogSections)
async def sections(browser: CatalogBrowser = Depends(get_browser)) -> CatalogSections:
    return browser.view().sections


@router.post("/reload", response_model=CatalogView)
async def reload_catalog(browser: CatalogBrowser = Depends(get_browser)):
    ok = await browser.load()
    view = browser.view()
    if not ok:
        # the prior catalog is still served; the error travels inside the view
        return JSONResponse(status_code=502, content=view.model_dump(mode="json"))
    return view
