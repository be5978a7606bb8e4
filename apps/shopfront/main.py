from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from .core.browser import CatalogBrowser, SnapshotTarget
from .core.config import Settings
from .core.data_source import CatalogDataSource, build_data_source
from .routers import catalog, detail

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, source: Optional[CatalogDataSource] = None) -> FastAPI:
    """Build the API around a single catalog browser session."""
    if settings is None:
        load_dotenv()
        settings = Settings.from_env()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        browser = CatalogBrowser(
            source or build_data_source(settings),
            SnapshotTarget(),
            debounce_seconds=settings.search_debounce_seconds,
        )
        app.state.browser = browser
        if not await browser.load():
            logger.warning("Starting with an empty catalog: %s", browser.load_error)
        try:
            yield
        finally:
            browser.shutdown(wait=False)

    app = FastAPI(title="Shopfront Catalog API", version="1.0.0", lifespan=lifespan)

    # Allow the storefront (local dev or deployed) to call the API.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.get("/")
    def root() -> dict[str, str]:
        """Provide a friendly landing response for the API root."""
        return {
            "message": "Shopfront Catalog API is running. Visit /docs for the OpenAPI UI.",
            "health": "/healthz",
        }

    @app.get("/favicon.ico", include_in_schema=False)
    def favicon() -> Response:
        """Return an empty response to suppress missing favicon errors in development."""
        return Response(status_code=204)

    @app.get("/healthz")
    def healthcheck() -> dict[str, str]:
        """Basic healthcheck endpoint for orchestration and tests."""
        return {"status": "ok"}

    app.include_router(catalog.router, prefix="/catalog", tags=["catalog"])
    app.include_router(detail.router, prefix="/detail", tags=["detail"])
    return app


app = create_app()
