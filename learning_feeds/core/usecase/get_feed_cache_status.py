from dataclasses import dataclass

from learning_feeds.core.repository.feed_cache import FeedCacheRepository
from learning_feeds.core.usecase.base import BaseUseCase


@dataclass
class GetFeedCacheStatusOutput:
    expired: bool
    age_s: int | None


@dataclass
class GetFeedCacheStatusUseCase(BaseUseCase[GetFeedCacheStatusOutput]):
    feed_cache: FeedCacheRepository

    async def execute(self) -> GetFeedCacheStatusOutput:
        return GetFeedCacheStatusOutput(
            expired=self.feed_cache.is_expired(),
            age_s=self.feed_cache.age_seconds(),
        )
