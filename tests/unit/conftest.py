from collections.abc import Callable, Iterator
from unittest import mock

import pytest

from learning_feeds.application.di import Container
from learning_feeds.core.repository.feed_cache import FeedCacheRepository
from learning_feeds.core.repository.feed_content import FeedContentStrategy
from learning_feeds.core.repository.feed_source import FeedSourceRepository


@pytest.fixture()
def source_repository(container: Container) -> Iterator[mock.Mock]:
    repo_mock = mock.Mock(spec=FeedSourceRepository)

    with container.repositories.feed_sources.override(repo_mock):
        yield repo_mock


@pytest.fixture()
def feed_cache(container: Container) -> Iterator[mock.Mock]:
    cache_mock = mock.Mock(spec=FeedCacheRepository)

    with container.repositories.feed_cache.override(cache_mock):
        yield cache_mock


@pytest.fixture()
def make_strategy() -> Callable[[str], mock.Mock]:
    def factory(name: str) -> mock.Mock:
        strategy = mock.Mock(spec=FeedContentStrategy)
        strategy.name = name
        return strategy

    return factory


@pytest.fixture()
def strategies(
    container: Container,
    make_strategy: Callable[[str], mock.Mock],
) -> Iterator[list[mock.Mock]]:
    strategy_mocks = [make_strategy("first"), make_strategy("second"), make_strategy("third")]

    with container.repositories.feed_content_strategies.override(strategy_mocks):
        yield strategy_mocks
