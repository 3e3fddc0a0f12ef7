from learning_feeds.core.entity.feed_category import CATEGORY_INFO, CategorizedFeedResult
from learning_feeds.core.entity.feed_result import AggregateFeedResult
from learning_feeds.core.entity.feed_source import FeedCategory


def group_by_category(
    feeds: AggregateFeedResult,
) -> dict[FeedCategory, list[CategorizedFeedResult]]:
    """
    Partition the successful, non-empty results of an aggregation by their category.

    Only categories that received at least one result are present,
    ordered the same way FeedCategory declares them.
    """
    grouped: dict[FeedCategory, list[CategorizedFeedResult]] = {
        category: [] for category in FeedCategory
    }

    for result in feeds.results:
        if not result.success or not result.items:
            continue

        category = result.category if result.category in CATEGORY_INFO else FeedCategory.general
        grouped[category].append(
            CategorizedFeedResult(
                **{**dict(result), "category": category},
                category_info=CATEGORY_INFO[category],
            )
        )

    return {category: results for category, results in grouped.items() if results}
