from collections.abc import Iterable
from pathlib import Path
from typing import Self

import pydantic
import structlog

from learning_feeds.application.settings import FeedSettings
from learning_feeds.core.entity.feed_source import FeedCategory, FeedSource, FeedSourceStats
from learning_feeds.core.repository.feed_source import (
    FeedSourceNotFoundError,
    FeedSourceRepository,
)

logger = structlog.get_logger()

# fmt: off
DEFAULT_FEED_SOURCES: list[FeedSource] = [
    FeedSource(
        key="HackerNews AI/ML",
        url="https://hnrss.org/newest?q=AI+OR+LLM+OR+GPT+OR+machine+learning+OR+artificial+intelligence",  # noqa: E501
        category=FeedCategory.news,
        description="Latest AI/ML discussions from Hacker News",
    ),
    FeedSource(
        key="ArXiv CS.AI",
        url="http://export.arxiv.org/rss/cs.AI",
        category=FeedCategory.research,
        description="Recent AI research papers from ArXiv",
    ),
    FeedSource(
        key="ArXiv CS.LG",
        url="http://export.arxiv.org/rss/cs.LG",
        category=FeedCategory.research,
        description="Machine Learning papers from ArXiv",
    ),
    FeedSource(
        key="Reddit r/MachineLearning",
        url="https://www.reddit.com/r/MachineLearning/.rss",
        category=FeedCategory.community,
        description="Machine Learning community discussions",
    ),
    FeedSource(
        key="Reddit r/artificial",
        url="https://www.reddit.com/r/artificial/.rss",
        category=FeedCategory.community,
        description="General AI discussions and news",
    ),
]
# fmt: on

_SOURCES_ADAPTER = pydantic.TypeAdapter(list[FeedSource])


def load_feed_sources(path: Path) -> list[FeedSource]:
    """Read a json list of feed sources, e.g. user defined feeds."""
    return _SOURCES_ADAPTER.validate_json(path.read_bytes())


class StaticFeedSourceRepository(FeedSourceRepository):
    """Feed sources known at process start, kept in registration order."""

    def __init__(self, sources: Iterable[FeedSource]) -> None:
        self._sources: dict[str, FeedSource] = {}

        for source in sources:
            if source.key in self._sources:
                raise ValueError(f"duplicate feed source key={source.key!r}")
            self._sources[source.key] = source

    @classmethod
    def from_settings(cls, settings: FeedSettings) -> Self:
        sources = list(DEFAULT_FEED_SOURCES)

        if settings.sources_file is not None:
            extra_sources = load_feed_sources(settings.sources_file)
            logger.info(
                "Loaded extra feed sources",
                path=str(settings.sources_file),
                count=len(extra_sources),
            )
            sources.extend(extra_sources)

        return cls(sources)

    def get_by_key(self, key: str) -> FeedSource:
        try:
            return self._sources[key]
        except KeyError:
            raise FeedSourceNotFoundError(f"feed source {key=} is not registered")

    def get_list(self, *, enabled_only: bool = True) -> list[FeedSource]:
        return [s for s in self._sources.values() if s.enabled or not enabled_only]

    def get_stats(self) -> FeedSourceStats:
        total = len(self._sources)
        enabled = sum(1 for s in self._sources.values() if s.enabled)
        return FeedSourceStats(total=total, enabled=enabled, disabled=total - enabled)
