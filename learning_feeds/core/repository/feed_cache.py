from abc import ABC, abstractmethod

from learning_feeds.core.entity.feed_result import AggregateFeedResult, CachedFeedPayload


class FeedCacheRepository(ABC):
    @abstractmethod
    def read(self) -> CachedFeedPayload | None:
        ...

    @abstractmethod
    def write(self, result: AggregateFeedResult) -> bool:
        ...

    @abstractmethod
    def is_expired(self) -> bool:
        ...

    @abstractmethod
    def age_seconds(self) -> int | None:
        ...

    @abstractmethod
    def clear(self) -> bool:
        ...
