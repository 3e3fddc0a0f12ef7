from datetime import timedelta

import pydantic
import structlog
from pydantic_core import PydanticSerializationError

from learning_feeds.core.entity.feed_result import AggregateFeedResult, CachedFeedPayload
from learning_feeds.core.repository.feed_cache import FeedCacheRepository
from learning_feeds.core.repository.kv_store import KeyValueStore, KeyValueStoreError
from learning_feeds.utils.dtime import now_aware

logger = structlog.get_logger()


class KeyValueFeedCacheRepository(FeedCacheRepository):
    """
    A single slot holding the last aggregated feeds.

    Entries older than the ttl are never served: they are dropped
    the moment a read notices them. Store errors are logged and
    reported through return values, they never propagate to the caller.
    """

    def __init__(self, store: KeyValueStore, *, key: str, ttl_s: int) -> None:
        self.store = store
        self.key = key
        self.ttl = timedelta(seconds=ttl_s)

    def read(self) -> CachedFeedPayload | None:
        try:
            payload = self._load()
        except (KeyValueStoreError, pydantic.ValidationError) as exc:
            logger.warning("Failed to read cached feeds", key=self.key, error=exc)
            self.clear()
            return None

        if payload is None:
            return None

        if self._is_stale(payload):
            logger.info("Cached feeds expired", key=self.key, cached_at=payload.cached_at)
            self.clear()
            return None

        return payload

    def write(self, result: AggregateFeedResult) -> bool:
        payload = CachedFeedPayload(
            results=result.results,
            timestamp=result.timestamp,
            cached_at=now_aware(),
        )

        try:
            self.store.set(self.key, payload.model_dump_json())
        except (KeyValueStoreError, PydanticSerializationError) as exc:
            logger.warning("Failed to cache feeds", key=self.key, error=exc)
            return False

        logger.debug("Cached feeds", key=self.key, cached_at=payload.cached_at)
        return True

    def is_expired(self) -> bool:
        try:
            payload = self._load()
        except (KeyValueStoreError, pydantic.ValidationError):
            return True

        return payload is None or self._is_stale(payload)

    def age_seconds(self) -> int | None:
        try:
            payload = self._load()
        except (KeyValueStoreError, pydantic.ValidationError):
            return None

        if payload is None:
            return None

        return int((now_aware() - payload.cached_at).total_seconds())

    def clear(self) -> bool:
        try:
            self.store.delete(self.key)
        except KeyValueStoreError as exc:
            logger.warning("Failed to clear cached feeds", key=self.key, error=exc)
            return False
        return True

    def _load(self) -> CachedFeedPayload | None:
        if (raw := self.store.get(self.key)) is None:
            return None
        return CachedFeedPayload.model_validate_json(raw)

    def _is_stale(self, payload: CachedFeedPayload) -> bool:
        return now_aware() - payload.cached_at > self.ttl
