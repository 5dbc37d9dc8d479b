"""FastAPI dependencies backed by components stored on ``app.state``."""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from uniqueness.config import UniquenessSettings
from uniqueness.db.session import Database
from uniqueness.services.aggregator import ResultAggregator
from uniqueness.services.search_modes import SearchContext


def get_app_settings(request: Request) -> UniquenessSettings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_http_client(request: Request) -> httpx.AsyncClient | None:
    return getattr(request.app.state, "http_client", None)


async def get_session(database: Database = Depends(get_database)) -> AsyncIterator[AsyncSession]:
    async with database.session() as session:
        yield session


def get_aggregator(
    settings: UniquenessSettings = Depends(get_app_settings),
    session: AsyncSession = Depends(get_session),
    http_client: httpx.AsyncClient | None = Depends(get_http_client),
) -> ResultAggregator:
    context = SearchContext(settings=settings, session=session, http_client=http_client)
    return ResultAggregator(context, settings=settings)


__all__ = [
    "get_aggregator",
    "get_app_settings",
    "get_database",
    "get_http_client",
    "get_session",
]
