import asyncio
import json
from abc import abstractmethod
from io import BytesIO

import httpx
import structlog

from learning_feeds.application.settings import FeedSettings, StrategyName
from learning_feeds.core.entity.feed_item import FeedItem
from learning_feeds.core.entity.feed_source import FeedSource
from learning_feeds.core.repository.feed_content import (
    FeedContentFetchError,
    FeedContentParseError,
    FeedContentStrategy,
    FeedContentTimeoutError,
)
from learning_feeds.data.external.normalizer import FeedNormalizer
from learning_feeds.data.external.payloads import (
    FeedPayload,
    Rss2JsonPayload,
    ServerlessPayload,
    decode_payload,
)

logger = structlog.get_logger()


class HttpFeedStrategy(FeedContentStrategy):
    """
    Fetches a feed over http with its own client and time budget,
    then hands the response body to the normalizer.
    """

    name: str

    def __init__(
        self,
        *,
        normalizer: FeedNormalizer,
        settings: FeedSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.normalizer = normalizer
        self.settings = settings
        self.transport = transport

    async def fetch(self, source: FeedSource) -> list[FeedItem]:
        url, params = self._build_request(source)

        try:
            async with asyncio.timeout(self.settings.fetch_timeout_s):
                content = await self._fetch_content(url, params=params)
        except TimeoutError as exc:
            raise FeedContentTimeoutError("timeout") from exc

        return self._parse_content(content, source)

    @abstractmethod
    def _build_request(self, source: FeedSource) -> tuple[str, dict[str, str] | None]:
        ...

    @abstractmethod
    def _parse_content(self, content: BytesIO, source: FeedSource) -> list[FeedItem]:
        ...

    async def _fetch_content(self, url: str, *, params: dict[str, str] | None) -> BytesIO:
        async with httpx.AsyncClient(
            timeout=self.settings.fetch_timeout_s,
            headers={"User-Agent": self.settings.user_agent},
            follow_redirects=True,
            transport=self.transport,
        ) as client:
            try:
                return await self._fetch_content_chunked(client, url, params=params)
            except httpx.TimeoutException as exc:
                raise FeedContentTimeoutError("timeout") from exc
            except httpx.HTTPStatusError as exc:
                raise FeedContentFetchError(f"HTTP {exc.response.status_code}") from exc
            except httpx.HTTPError as exc:
                raise FeedContentFetchError(f"request failed: {exc!r}") from exc

    async def _fetch_content_chunked(
        self,
        client: httpx.AsyncClient,
        url: str,
        *,
        params: dict[str, str] | None,
    ) -> BytesIO:
        max_body_size = self.settings.max_body_size_b
        content = BytesIO()

        async with client.stream("GET", url, params=params) as resp:
            resp.raise_for_status()

            async for chunk in resp.aiter_bytes():
                content.write(chunk)
                # don't read more than max_body_size
                if content.tell() > max_body_size:
                    raise FeedContentFetchError(f"response exceeds {max_body_size=} limit")

        content.seek(0)
        return content


class XmlFeedStrategy(HttpFeedStrategy):
    def _parse_content(self, content: BytesIO, source: FeedSource) -> list[FeedItem]:
        return self.normalizer.normalize(content.getvalue(), source.key)


class JsonFeedStrategy(HttpFeedStrategy):
    payload_type: type[FeedPayload]

    def _parse_content(self, content: BytesIO, source: FeedSource) -> list[FeedItem]:
        try:
            data = json.loads(content.getvalue())
        except ValueError as exc:
            raise FeedContentParseError("response is not valid json") from exc

        if not isinstance(data, dict):
            raise FeedContentParseError(f"expected a json object, got {type(data).__name__}")

        payload = decode_payload(data)
        if not isinstance(payload, self.payload_type):
            raise FeedContentParseError(f"unexpected {type(payload).__name__} response")

        return self.normalizer.normalize_decoded(payload, source.key)


class Rss2JsonStrategy(JsonFeedStrategy):
    name = "rss2json"
    payload_type = Rss2JsonPayload

    def _build_request(self, source: FeedSource) -> tuple[str, dict[str, str] | None]:
        return self.settings.rss2json_url, {"rss_url": source.url}


class AllOriginsStrategy(XmlFeedStrategy):
    name = "allorigins"

    def _build_request(self, source: FeedSource) -> tuple[str, dict[str, str] | None]:
        return self.settings.allorigins_url, {"url": source.url}


class ServerlessStrategy(JsonFeedStrategy):
    name = "serverless"
    payload_type = ServerlessPayload

    def _build_request(self, source: FeedSource) -> tuple[str, dict[str, str] | None]:
        return self.settings.serverless_url, {"url": source.url}


class DirectStrategy(XmlFeedStrategy):
    name = "direct"

    def _build_request(self, source: FeedSource) -> tuple[str, dict[str, str] | None]:
        return source.url, None


STRATEGY_PER_NAME: dict[StrategyName, type[HttpFeedStrategy]] = {
    "rss2json": Rss2JsonStrategy,
    "allorigins": AllOriginsStrategy,
    "serverless": ServerlessStrategy,
    "direct": DirectStrategy,
}


def build_strategies(
    *,
    settings: FeedSettings,
    normalizer: FeedNormalizer,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[FeedContentStrategy]:
    strategies: list[FeedContentStrategy] = [
        STRATEGY_PER_NAME[name](normalizer=normalizer, settings=settings, transport=transport)
        for name in settings.fetch_strategies
    ]
    logger.debug("Configured feed fetch strategies", strategies=[s.name for s in strategies])
    return strategies
