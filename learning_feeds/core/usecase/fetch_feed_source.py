from dataclasses import dataclass, field

import structlog

from learning_feeds.core.entity.feed_item import FeedItem
from learning_feeds.core.entity.feed_source import FeedSource
from learning_feeds.core.repository import feed_source as source_repo
from learning_feeds.core.repository.feed_content import FeedContentError, FeedContentStrategy
from learning_feeds.core.usecase.base import BaseUseCase

logger = structlog.get_logger()


@dataclass
class FetchFeedSourceInput:
    source_key: str


@dataclass
class FetchFeedSourceOutput:
    source: FeedSource
    items: list[FeedItem]
    # reasons of the strategies that were tried and failed before the successful one
    failures: list[str] = field(default_factory=list)


class FeedSourceNotFoundError(Exception):
    ...


class AllStrategiesFailedError(Exception):
    def __init__(self, source_key: str, reasons: list[str]) -> None:
        self.source_key = source_key
        self.reasons = reasons
        super().__init__(f"All strategies failed for {source_key}:\n" + "\n".join(reasons))


@dataclass
class FetchFeedSourceUseCase(BaseUseCase[FetchFeedSourceOutput]):
    source_repository: source_repo.FeedSourceRepository
    strategies: list[FeedContentStrategy]

    async def execute(self, data: FetchFeedSourceInput) -> FetchFeedSourceOutput:
        source = self._get_source(data.source_key)
        return await self.fetch(source)

    async def fetch(self, source: FeedSource) -> FetchFeedSourceOutput:
        """
        Try the strategies in order and return the items of the first one
        that yields any. Later strategies are not attempted after that.
        """
        failures: list[str] = []

        for strategy in self.strategies:
            log = logger.bind(source=source.key, strategy=strategy.name)

            try:
                items = await strategy.fetch(source)
            except FeedContentError as exc:
                log.info("Feed fetch strategy failed", error=str(exc))
                failures.append(f"{strategy.name}: {exc}")
                continue
            except Exception as exc:  # noqa: BLE001
                log.warning("Feed fetch strategy failed unexpectedly", exc_info=exc)
                failures.append(f"{strategy.name}: {exc!r}")
                continue

            if not items:
                log.info("Feed fetch strategy returned no items")
                failures.append(f"{strategy.name}: no items")
                continue

            log.info("Feed fetched", items=len(items), failed_attempts=len(failures))
            return FetchFeedSourceOutput(source=source, items=items, failures=failures)

        raise AllStrategiesFailedError(source.key, failures)

    def _get_source(self, source_key: str) -> FeedSource:
        try:
            return self.source_repository.get_by_key(source_key)
        except source_repo.FeedSourceNotFoundError:
            logger.info("Requested feed source not found", source_key=source_key)
            raise FeedSourceNotFoundError(f"Feed source {source_key=} not found in registry")
