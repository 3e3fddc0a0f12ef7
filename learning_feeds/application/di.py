# mypy: disable-error-code="assignment"
from dependency_injector import containers, providers

from learning_feeds.application.settings import (
    ApplicationSettings,
    FeedSettings,
    LoggingSettings,
)
from learning_feeds.core.usecase.clear_feed_cache import ClearFeedCacheUseCase
from learning_feeds.core.usecase.fetch_all_feeds import FetchAllFeedsUseCase
from learning_feeds.core.usecase.fetch_feed_source import FetchFeedSourceUseCase
from learning_feeds.core.usecase.get_feed_cache_status import GetFeedCacheStatusUseCase
from learning_feeds.core.usecase.get_feeds import GetFeedsUseCase
from learning_feeds.core.usecase.get_grouped_feeds import GetGroupedFeedsUseCase
from learning_feeds.core.usecase.list_feed_sources import ListFeedSourcesUseCase
from learning_feeds.data.cache.feed_cache import KeyValueFeedCacheRepository
from learning_feeds.data.external.normalizer import FeedNormalizer
from learning_feeds.data.external.strategies import build_strategies
from learning_feeds.data.file.kv_store import FileKeyValueStore
from learning_feeds.data.memory.kv_store import InMemoryKeyValueStore
from learning_feeds.data.static.feed_sources import StaticFeedSourceRepository


class Settings(containers.DeclarativeContainer):
    app = providers.Singleton(ApplicationSettings)
    feeds = providers.Singleton(FeedSettings)
    logging = providers.Singleton(LoggingSettings)


class Repositories(containers.DeclarativeContainer):
    settings: Settings = providers.DependenciesContainer()

    feed_sources = providers.Singleton(
        StaticFeedSourceRepository.from_settings,
        settings=settings.feeds,
    )

    feed_normalizer = providers.Singleton(
        FeedNormalizer,
        max_items=settings.feeds.provided.max_items_per_source,
        description_max_length=settings.feeds.provided.description_max_length,
    )
    feed_content_strategies = providers.Singleton(
        build_strategies,
        settings=settings.feeds,
        normalizer=feed_normalizer,
    )

    kv_store = providers.Selector(
        settings.feeds.provided.cache_backend,
        memory=providers.Singleton(InMemoryKeyValueStore),
        file=providers.Singleton(FileKeyValueStore, directory=settings.feeds.provided.cache_dir),
    )
    feed_cache = providers.Singleton(
        KeyValueFeedCacheRepository,
        store=kv_store,
        key=settings.feeds.provided.cache_key,
        ttl_s=settings.feeds.provided.cache_ttl_s,
    )


class UseCases(containers.DeclarativeContainer):
    repositories: Repositories = providers.DependenciesContainer()

    fetch_feed_source = providers.Factory(
        FetchFeedSourceUseCase,
        source_repository=repositories.feed_sources,
        strategies=repositories.feed_content_strategies,
    )
    fetch_all_feeds = providers.Factory(
        FetchAllFeedsUseCase,
        source_repository=repositories.feed_sources,
        fetch_feed_source=fetch_feed_source,
    )
    get_feeds = providers.Factory(
        GetFeedsUseCase,
        fetch_all_feeds=fetch_all_feeds,
        feed_cache=repositories.feed_cache,
    )
    get_grouped_feeds = providers.Factory(
        GetGroupedFeedsUseCase,
        get_feeds=get_feeds,
    )

    get_feed_cache_status = providers.Factory(
        GetFeedCacheStatusUseCase,
        feed_cache=repositories.feed_cache,
    )
    clear_feed_cache = providers.Factory(
        ClearFeedCacheUseCase,
        feed_cache=repositories.feed_cache,
    )

    list_feed_sources = providers.Factory(
        ListFeedSourcesUseCase,
        source_repository=repositories.feed_sources,
    )


class Container(containers.DeclarativeContainer):
    settings: Settings = providers.Container(Settings)
    repositories: Repositories = providers.Container(Repositories, settings=settings)
    use_cases: UseCases = providers.Container(UseCases, repositories=repositories)


def init() -> Container:
    container = Container()
    container.check_dependencies()
    return container
