from abc import ABC, abstractmethod

from learning_feeds.core.entity.feed_source import FeedSource, FeedSourceStats


class FeedSourceNotFoundError(Exception):
    ...


class FeedSourceRepository(ABC):
    @abstractmethod
    def get_by_key(self, key: str) -> FeedSource:
        ...

    @abstractmethod
    def get_list(self, *, enabled_only: bool = True) -> list[FeedSource]:
        ...

    @abstractmethod
    def get_stats(self) -> FeedSourceStats:
        ...
