from dataclasses import dataclass

from learning_feeds.core.entity.feed_source import FeedSource, FeedSourceStats
from learning_feeds.core.repository.feed_source import FeedSourceRepository
from learning_feeds.core.usecase.base import BaseUseCase


@dataclass
class ListFeedSourcesInput:
    enabled_only: bool = False


@dataclass
class ListFeedSourcesOutput:
    sources: list[FeedSource]
    stats: FeedSourceStats


@dataclass
class ListFeedSourcesUseCase(BaseUseCase[ListFeedSourcesOutput]):
    source_repository: FeedSourceRepository

    async def execute(self, data: ListFeedSourcesInput) -> ListFeedSourcesOutput:
        return ListFeedSourcesOutput(
            sources=self.source_repository.get_list(enabled_only=data.enabled_only),
            stats=self.source_repository.get_stats(),
        )
