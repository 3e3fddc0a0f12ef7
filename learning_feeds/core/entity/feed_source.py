from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FeedCategory(StrEnum):
    news = "news"
    research = "research"
    community = "community"
    general = "general"


class FeedSource(BaseModel):
    key: str = Field(..., min_length=1, description="Unique name of the source")
    url: str = Field(..., description="Public URL of the rss/atom feed")
    category: FeedCategory = FeedCategory.general
    description: str = ""
    enabled: bool = True

    model_config = ConfigDict(frozen=True)

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_unknown_category(cls, value: Any) -> Any:
        # unknown categories fall into the default bucket
        if isinstance(value, str) and value not in FeedCategory.__members__:
            return FeedCategory.general
        return value


class FeedSourceStats(BaseModel):
    total: int
    enabled: int
    disabled: int
