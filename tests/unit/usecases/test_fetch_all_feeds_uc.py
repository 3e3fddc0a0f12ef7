import asyncio
from datetime import UTC, datetime
from unittest import mock

import pytest

from learning_feeds.application.di import Container
from learning_feeds.core.entity.feed_item import FeedItem
from learning_feeds.core.entity.feed_source import FeedCategory, FeedSource
from learning_feeds.core.repository.feed_content import FeedContentFetchError
from learning_feeds.core.usecase.fetch_all_feeds import FetchAllFeedsUseCase
from tests.factories import FeedItemFactory, FeedSourceFactory


@pytest.fixture()
def uc(
    container: Container,
    source_repository: mock.Mock,
    strategies: list[mock.Mock],
) -> FetchAllFeedsUseCase:
    return container.use_cases.fetch_all_feeds()


@mock.patch(
    "learning_feeds.core.usecase.fetch_all_feeds.now_aware",
    return_value=datetime(2006, 1, 2, 15, 4, 5, 999999, tzinfo=UTC),
)
async def test_results_keep_registry_order(
    now_aware_mock: mock.Mock,
    uc: FetchAllFeedsUseCase,
    source_repository: mock.Mock,
    strategies: list[mock.Mock],
) -> None:
    slow, fast, broken = [
        FeedSourceFactory.build(key="slow", category=FeedCategory.research),
        FeedSourceFactory.build(key="fast", category=FeedCategory.news),
        FeedSourceFactory.build(key="broken", category=FeedCategory.community),
    ]
    items_per_key = {
        "slow": FeedItemFactory.batch(2),
        "fast": FeedItemFactory.batch(1),
    }
    delay_per_key = {"slow": 0.2, "fast": 0.01, "broken": 0.05}

    async def fetch(source: FeedSource) -> list[FeedItem]:
        await asyncio.sleep(delay_per_key[source.key])
        if source.key == "broken":
            raise FeedContentFetchError("HTTP 500")
        return items_per_key[source.key]

    source_repository.get_list.return_value = [slow, fast, broken]
    for strategy in strategies:
        strategy.fetch.side_effect = fetch

    feeds = await uc.execute()

    assert [r.source_key for r in feeds.results] == ["slow", "fast", "broken"]
    assert feeds.success_count == 2
    assert feeds.total_count == 3
    assert feeds.timestamp == datetime(2006, 1, 2, 15, 4, 5, 999999, tzinfo=UTC)

    slow_result, fast_result, broken_result = feeds.results
    assert slow_result.success is True
    assert slow_result.category == FeedCategory.research
    assert slow_result.items == items_per_key["slow"]
    assert slow_result.error is None
    assert fast_result.items == items_per_key["fast"]

    assert broken_result.success is False
    assert broken_result.items == []
    assert broken_result.category == FeedCategory.community
    assert broken_result.error == (
        "All strategies failed for broken:\n"
        "first: HTTP 500\n"
        "second: HTTP 500\n"
        "third: HTTP 500"
    )

    source_repository.get_list.assert_called_once_with(enabled_only=True)


async def test_sources_are_fetched_concurrently(
    uc: FetchAllFeedsUseCase,
    source_repository: mock.Mock,
    strategies: list[mock.Mock],
) -> None:
    sources = FeedSourceFactory.batch(5)
    in_flight = 0
    max_in_flight = 0

    async def fetch(source: FeedSource) -> list[FeedItem]:
        nonlocal in_flight, max_in_flight
        in_flight += 1
        max_in_flight = max(max_in_flight, in_flight)
        await asyncio.sleep(0.05)
        in_flight -= 1
        return FeedItemFactory.batch(1)

    source_repository.get_list.return_value = sources
    strategies[0].fetch.side_effect = fetch

    feeds = await uc.execute()

    assert feeds.success_count == 5
    assert max_in_flight == 5


async def test_unexpected_error_becomes_failed_result(
    uc: FetchAllFeedsUseCase,
    source_repository: mock.Mock,
    strategies: list[mock.Mock],
) -> None:
    source = FeedSourceFactory.build(key="odd")
    source_repository.get_list.return_value = [source]

    with mock.patch(
        "learning_feeds.core.usecase.fetch_feed_source.FetchFeedSourceUseCase.fetch",
        side_effect=KeyError("oops"),
    ):
        feeds = await uc.execute()

    (result,) = feeds.results
    assert result.success is False
    assert result.error == "Unexpected error: KeyError('oops')"
    assert feeds.success_count == 0
    assert feeds.total_count == 1


async def test_no_enabled_sources(
    uc: FetchAllFeedsUseCase,
    source_repository: mock.Mock,
) -> None:
    source_repository.get_list.return_value = []

    feeds = await uc.execute()

    assert feeds.results == []
    assert feeds.success_count == 0
    assert feeds.total_count == 0
