from collections.abc import Callable, Iterator

import pytest
from pytest_localserver.http import ContentServer

from learning_feeds.application.di import Container
from learning_feeds.application.settings import FeedSettings
from learning_feeds.core.entity.feed_source import FeedCategory, FeedSource
from learning_feeds.data.cache.feed_cache import KeyValueFeedCacheRepository
from learning_feeds.data.external.normalizer import FeedNormalizer
from learning_feeds.data.external.strategies import build_strategies
from learning_feeds.data.memory.kv_store import InMemoryKeyValueStore
from learning_feeds.data.static.feed_sources import StaticFeedSourceRepository
from tests.pytest_fixtures.types import CreateHttpServersFixtureT

# fmt: off
ITEM_TRANSFORMERS = (
    """
    <item>
      <title>Transformers, explained</title>
      <link>https://example.com/transformers</link>
      <description>&lt;p&gt;A gentle &lt;em&gt;introduction&lt;/em&gt;.&lt;/p&gt;</description>
      <guid>https://example.com/transformers</guid>
      <pubDate>Tue, 05 Mar 2024 08:30:00 GMT</pubDate>
    </item>
    """
)
ITEM_DIFFUSION = (
    """
    <item>
      <title>Diffusion models in 10 minutes</title>
      <link>https://example.com/diffusion</link>
      <description>Noise in, pictures out.</description>
      <guid>https://example.com/diffusion</guid>
      <pubDate>Mon, 04 Mar 2024 18:00:00 GMT</pubDate>
    </item>
    """
)
# fmt: on


@pytest.fixture()
def feed_cache(container: Container) -> Iterator[KeyValueFeedCacheRepository]:
    repo = KeyValueFeedCacheRepository(
        InMemoryKeyValueStore(),
        key="learningos_feeds_cache",
        ttl_s=900,
    )

    with container.repositories.feed_cache.override(repo):
        yield repo


@pytest.fixture()
def _direct_strategy_only(container: Container) -> Iterator[None]:
    settings = FeedSettings(fetch_strategies=["direct"], fetch_timeout_s=5)
    strategies = build_strategies(settings=settings, normalizer=FeedNormalizer())

    with container.repositories.feed_content_strategies.override(strategies):
        yield


@pytest.fixture()
def feed_servers(
    create_httpservers: CreateHttpServersFixtureT,
    wrap_rss_content: Callable[[str, str], str],
) -> Iterator[list[ContentServer]]:
    with create_httpservers(3) as servers:
        blog, papers, broken = servers
        blog.serve_content(
            wrap_rss_content("Blog", ITEM_TRANSFORMERS + ITEM_DIFFUSION),
            headers={"Content-Type": "application/rss+xml"},
        )
        papers.serve_content(
            wrap_rss_content("Papers", ITEM_DIFFUSION),
            headers={"Content-Type": "application/rss+xml"},
        )
        broken.serve_content("Internal Server Error", code=500)
        yield servers


@pytest.fixture()
def feed_sources(
    container: Container,
    feed_servers: list[ContentServer],
) -> Iterator[StaticFeedSourceRepository]:
    blog, papers, broken = feed_servers
    repo = StaticFeedSourceRepository(
        [
            FeedSource(key="Blog", url=blog.url, category=FeedCategory.news),
            FeedSource(key="Papers", url=papers.url, category=FeedCategory.research),
            FeedSource(key="Broken", url=broken.url, category=FeedCategory.community),
            FeedSource(key="Disabled", url=blog.url, enabled=False),
        ]
    )

    with container.repositories.feed_sources.override(repo):
        yield repo
