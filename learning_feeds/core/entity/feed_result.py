from typing import Any

from pydantic import AwareDatetime, BaseModel, ConfigDict, model_validator

from learning_feeds.core.entity.feed_item import FeedItem
from learning_feeds.core.entity.feed_source import FeedCategory


class SourceFetchResult(BaseModel):
    source_key: str
    category: FeedCategory
    items: list[FeedItem]
    success: bool
    error: str | None = None
    fetched_at: AwareDatetime

    model_config = ConfigDict(frozen=True)


class AggregateFeedResult(BaseModel):
    results: list[SourceFetchResult]
    timestamp: AwareDatetime
    success_count: int = 0
    total_count: int = 0

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _count_results(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "results" not in data:
            return data

        results = [
            r if isinstance(r, SourceFetchResult) else SourceFetchResult.model_validate(r)
            for r in data["results"]
        ]
        return {
            **data,
            "results": results,
            "success_count": sum(1 for r in results if r.success),
            "total_count": len(results),
        }


class CachedFeedPayload(AggregateFeedResult):
    cached_at: AwareDatetime

    def to_result(self) -> AggregateFeedResult:
        return AggregateFeedResult(results=self.results, timestamp=self.timestamp)
