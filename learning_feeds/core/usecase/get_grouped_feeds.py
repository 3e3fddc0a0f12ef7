from dataclasses import dataclass

from learning_feeds.core.entity.feed_category import CategorizedFeedResult
from learning_feeds.core.entity.feed_source import FeedCategory
from learning_feeds.core.grouping import group_by_category
from learning_feeds.core.usecase.base import BaseUseCase
from learning_feeds.core.usecase.get_feeds import GetFeedsInput, GetFeedsUseCase


@dataclass
class GetGroupedFeedsOutput:
    groups: dict[FeedCategory, list[CategorizedFeedResult]]
    from_cache: bool
    cache_age_s: int | None = None


@dataclass
class GetGroupedFeedsUseCase(BaseUseCase[GetGroupedFeedsOutput]):
    get_feeds: GetFeedsUseCase

    async def execute(self, data: GetFeedsInput) -> GetGroupedFeedsOutput:
        output = await self.get_feeds.execute(data)
        return GetGroupedFeedsOutput(
            groups=group_by_category(output.feeds),
            from_cache=output.from_cache,
            cache_age_s=output.cache_age_s,
        )
