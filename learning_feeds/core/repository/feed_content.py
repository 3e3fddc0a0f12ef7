from abc import ABC, abstractmethod

from learning_feeds.core.entity.feed_item import FeedItem
from learning_feeds.core.entity.feed_source import FeedSource


class FeedContentError(Exception):
    ...


class FeedContentFetchError(FeedContentError):
    ...


class FeedContentTimeoutError(FeedContentFetchError):
    ...


class FeedContentParseError(FeedContentError):
    ...


class FeedContentStrategy(ABC):
    """One way of retrieving the items of a feed source."""

    name: str

    @abstractmethod
    async def fetch(self, source: FeedSource) -> list[FeedItem]:
        ...
