from datetime import datetime

from pydantic import BaseModel, ConfigDict

from learning_feeds.core.entity.feed_source import FeedCategory


class ApiFeedItem(BaseModel):
    title: str
    link: str
    description: str
    published_at: datetime
    unique_id: str
    author: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ApiSourceFetchResult(BaseModel):
    source_key: str
    category: FeedCategory
    items: list[ApiFeedItem]
    success: bool
    error: str | None = None
    fetched_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ApiFeeds(BaseModel):
    results: list[ApiSourceFetchResult]
    timestamp: datetime
    success_count: int
    total_count: int
    from_cache: bool
    cache_age_s: int | None = None


class ApiCategoryInfo(BaseModel):
    name: str
    color: str
    icon: str

    model_config = ConfigDict(from_attributes=True)


class ApiCategorizedSourceResult(ApiSourceFetchResult):
    category_info: ApiCategoryInfo


class ApiFeedCategories(BaseModel):
    categories: dict[str, list[ApiCategorizedSourceResult]]
    from_cache: bool
    cache_age_s: int | None = None


class ApiFeedCacheStatus(BaseModel):
    expired: bool
    age_s: int | None = None

    model_config = ConfigDict(from_attributes=True)


class ApiFeedSource(BaseModel):
    key: str
    url: str
    category: FeedCategory
    description: str
    enabled: bool

    model_config = ConfigDict(from_attributes=True)


class ApiFeedSourceStats(BaseModel):
    total: int
    enabled: int
    disabled: int

    model_config = ConfigDict(from_attributes=True)


class ApiFeedSources(BaseModel):
    sources: list[ApiFeedSource]
    stats: ApiFeedSourceStats

    model_config = ConfigDict(from_attributes=True)


class ApiSourceItems(BaseModel):
    source: ApiFeedSource
    items: list[ApiFeedItem]
    failures: list[str]

    model_config = ConfigDict(from_attributes=True)
