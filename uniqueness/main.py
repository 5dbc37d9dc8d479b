"""Application entrypoint."""

from __future__ import annotations

import asyncio
import logging

import uvicorn

from uniqueness.config import get_settings
from uniqueness.db.session import Database
from uniqueness.logging import configure_logging, logger
from uniqueness.web.app import create_app


async def main() -> None:
    settings = get_settings()
    configure_logging(
        logging.DEBUG if settings.environment == "dev" else logging.INFO,
        environment=settings.environment,
    )
    database = Database(settings=settings)
    await database.create_schema()

    app = create_app(settings, database=database)
    server = uvicorn.Server(
        uvicorn.Config(app, host=settings.http.host, port=settings.http.port, log_config=None)
    )
    logger.info("uniqueness_starting", host=settings.http.host, port=settings.http.port)
    try:
        await server.serve()
    finally:
        await database.dispose()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
