from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from learning_feeds.application import di
from learning_feeds.application.di import Container
from learning_feeds.application.logging import configure_logging
from learning_feeds.fastapi.api.router import router as api_router
from learning_feeds.fastapi.misc.views import info

logger = structlog.get_logger()


def init(container: Container) -> FastAPI:
    app_settings = container.settings.app()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        feed_settings = container.settings.feeds()
        logger.info(
            "Feeds API started",
            sources=container.repositories.feed_sources().get_stats().model_dump(),
            strategies=feed_settings.fetch_strategies,
            cache_backend=feed_settings.cache_backend,
        )
        yield

    app = FastAPI(title=app_settings.name, version=app_settings.release_ver, lifespan=lifespan)
    app.include_router(info.router, tags=["misc"])
    app.include_router(api_router, prefix="/api")

    app.state.container = container
    app.state.logger = logger

    return app


def get_asgi_app() -> FastAPI:
    container = di.init()
    configure_logging(container.settings.logging())
    return init(container)
