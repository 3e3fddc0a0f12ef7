import asyncio
from dataclasses import dataclass

import structlog

from learning_feeds.core.entity.feed_result import AggregateFeedResult, SourceFetchResult
from learning_feeds.core.entity.feed_source import FeedSource
from learning_feeds.core.repository.feed_source import FeedSourceRepository
from learning_feeds.core.usecase.base import BaseUseCase
from learning_feeds.core.usecase.fetch_feed_source import (
    AllStrategiesFailedError,
    FetchFeedSourceUseCase,
)
from learning_feeds.utils.dtime import now_aware

logger = structlog.get_logger()


@dataclass
class FetchAllFeedsUseCase(BaseUseCase[AggregateFeedResult]):
    source_repository: FeedSourceRepository
    fetch_feed_source: FetchFeedSourceUseCase

    async def execute(self) -> AggregateFeedResult:
        sources = self.source_repository.get_list(enabled_only=True)
        logger.info("Fetching feeds", count=len(sources))

        # gather returns results in the order of the sources, not in order of completion
        results = await asyncio.gather(*[self._fetch_source(source) for source in sources])

        feeds = AggregateFeedResult(results=results, timestamp=now_aware())
        logger.info("Feeds fetched", success=feeds.success_count, total=feeds.total_count)

        return feeds

    async def _fetch_source(self, source: FeedSource) -> SourceFetchResult:
        try:
            output = await self.fetch_feed_source.fetch(source)
        except AllStrategiesFailedError as exc:
            logger.warning("Failed to fetch feed", source=source.key, reasons=exc.reasons)
            return self._failed_result(source, error=str(exc))
        # per-source failures end up in the result, they are never raised
        except Exception as exc:  # noqa: BLE001
            logger.error("Unexpected error while fetching feed", source=source.key, exc_info=exc)
            return self._failed_result(source, error=f"Unexpected error: {exc!r}")

        return SourceFetchResult(
            source_key=source.key,
            category=source.category,
            items=output.items,
            success=True,
            fetched_at=now_aware(),
        )

    def _failed_result(self, source: FeedSource, *, error: str) -> SourceFetchResult:
        return SourceFetchResult(
            source_key=source.key,
            category=source.category,
            items=[],
            success=False,
            error=error,
            fetched_at=now_aware(),
        )
