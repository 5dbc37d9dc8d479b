"""FastAPI application factory."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from uniqueness import __version__
from uniqueness.config import UniquenessSettings, get_settings
from uniqueness.db.session import Database
from uniqueness.logging import logger
from uniqueness.web.routers import setup_routers


def create_app(
    settings: UniquenessSettings | None = None,
    *,
    database: Database | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Build the service; components passed in are used as-is and not closed."""

    settings = settings or get_settings()
    owns_client = http_client is None

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if owns_client:
            app.state.http_client = httpx.AsyncClient()
        logger.info(
            "uniqueness_started",
            environment=settings.environment,
            search_mode=settings.search_mode,
        )
        try:
            yield
        finally:
            if owns_client:
                await app.state.http_client.aclose()
                app.state.http_client = None

    app = FastAPI(title="Uniqueness", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database or Database(settings=settings)
    app.state.http_client = http_client
    app.include_router(setup_routers(settings.http.route_prefix))
    return app


__all__ = ["create_app"]
