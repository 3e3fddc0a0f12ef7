from dataclasses import dataclass

import structlog

from learning_feeds.core.repository.feed_cache import FeedCacheRepository
from learning_feeds.core.usecase.base import BaseUseCase

logger = structlog.get_logger()


class FeedCacheClearError(Exception):
    ...


@dataclass
class ClearFeedCacheUseCase(BaseUseCase[None]):
    feed_cache: FeedCacheRepository

    async def execute(self) -> None:
        if not self.feed_cache.clear():
            raise FeedCacheClearError("Feed cache could not be cleared")
        logger.info("Feed cache cleared")
