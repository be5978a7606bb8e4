from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends

from ..core.browser import CatalogBrowser
from ..schemas import CatalogView
from .catalog import get_browser

router = APIRouter()


@router.get("", response_model=CatalogView)
async def current_detail(browser: CatalogBrowser = Depends(get_browser)) -> CatalogView:
    return browser.view()


@router.post("/open/{product_id}", response_model=CatalogView)
async def open_product(
    product_id: str,
    background_tasks: BackgroundTasks,
    browser: CatalogBrowser = Depends(get_browser),
) -> CatalogView:
    """Open a product; the popularity bump runs after the response is sent."""
    browser.open_product(product_id, dispatch=background_tasks.add_task)
    return browser.view()


@router.post("/media/{index}", response_model=CatalogView)
async def select_media(index: int, browser: CatalogBrowser = Depends(get_browser)) -> CatalogView:
    browser.select_media(index)
    return browser.view()


@router.post("/close", response_model=CatalogView)
async def close_detail(browser: CatalogBrowser = Depends(get_browser)) -> CatalogView:
    browser.close_detail()
    return browser.view()
