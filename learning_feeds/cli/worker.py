import asyncio

import click
import structlog

from learning_feeds.application import di
from learning_feeds.application.di import Container
from learning_feeds.application.logging import configure_logging
from learning_feeds.application.settings import FeedSettings
from learning_feeds.core.usecase.get_feeds import GetFeedsInput

logger = structlog.get_logger()


@click.command(context_settings={"auto_envvar_prefix": "WORKER"})
@click.option(
    "--interval",
    default=300,
    type=click.INT,
    help="Define how often to check the feed cache, in seconds",
)
def worker(interval: int) -> None:
    click.echo(f"Running feed refresh worker with {interval=}s")
    container = di.init()
    configure_logging(container.settings.logging())
    check_cache_backend(container.settings.feeds())
    asyncio.run(run(container, interval))


def check_cache_backend(settings: FeedSettings) -> None:
    # an in-memory slot lives and dies with this process, api processes never read it
    if settings.cache_backend == "memory":
        logger.warning(
            "Worker refreshes a process-local cache, set FEEDS_CACHE_BACKEND=file to share it",
            cache_backend=settings.cache_backend,
        )


async def refresh_feeds(container: Container) -> None:
    # only stale or missing cache entries trigger a fetch
    uc = container.use_cases.get_feeds()
    try:
        uc_result = await uc.execute(GetFeedsInput())
    except Exception as exc:  # noqa: BLE001
        logger.error("Failed to refresh feeds", exc_info=exc)
        return

    logger.info(
        "Feeds refreshed",
        from_cache=uc_result.from_cache,
        success_count=uc_result.feeds.success_count,
        total_count=uc_result.feeds.total_count,
    )


async def run(container: Container, interval: int) -> None:
    while True:
        await asyncio.gather(
            refresh_feeds(container),
            asyncio.sleep(interval),
        )
