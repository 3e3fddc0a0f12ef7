from dataclasses import dataclass

import structlog

from learning_feeds.core.entity.feed_result import AggregateFeedResult
from learning_feeds.core.repository.feed_cache import FeedCacheRepository
from learning_feeds.core.usecase.base import BaseUseCase
from learning_feeds.core.usecase.fetch_all_feeds import FetchAllFeedsUseCase
from learning_feeds.utils.dtime import now_aware

logger = structlog.get_logger()


@dataclass
class GetFeedsInput:
    force_refresh: bool = False


@dataclass
class GetFeedsOutput:
    feeds: AggregateFeedResult
    from_cache: bool
    cache_age_s: int | None = None


@dataclass
class GetFeedsUseCase(BaseUseCase[GetFeedsOutput]):
    fetch_all_feeds: FetchAllFeedsUseCase
    feed_cache: FeedCacheRepository

    async def execute(self, data: GetFeedsInput) -> GetFeedsOutput:
        if not data.force_refresh and (cached := self.feed_cache.read()) is not None:
            age_s = int((now_aware() - cached.cached_at).total_seconds())
            logger.info("Serving cached feeds", age_s=age_s)
            return GetFeedsOutput(feeds=cached.to_result(), from_cache=True, cache_age_s=age_s)

        feeds = await self.fetch_all_feeds.execute()

        if feeds.success_count:
            # the fresh result is returned even if it could not be cached
            self.feed_cache.write(feeds)
        else:
            logger.warning("No feed was fetched, skipping cache update", total=feeds.total_count)

        return GetFeedsOutput(feeds=feeds, from_cache=False)
