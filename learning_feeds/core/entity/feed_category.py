from pydantic import BaseModel, ConfigDict

from learning_feeds.core.entity.feed_result import SourceFetchResult
from learning_feeds.core.entity.feed_source import FeedCategory


class CategoryInfo(BaseModel):
    name: str
    color: str
    icon: str

    model_config = ConfigDict(frozen=True)


# fmt: off
CATEGORY_INFO: dict[FeedCategory, CategoryInfo] = {
    FeedCategory.news: CategoryInfo(name="News & Articles", color="blue", icon="📡"),
    FeedCategory.research: CategoryInfo(name="Research Papers", color="purple", icon="🔬"),
    FeedCategory.community: CategoryInfo(name="Community Discussions", color="green", icon="💬"),
    FeedCategory.general: CategoryInfo(name="General", color="gray", icon="📄"),
}
# fmt: on


class CategorizedFeedResult(SourceFetchResult):
    category_info: CategoryInfo
