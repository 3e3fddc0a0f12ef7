import hashlib
from datetime import UTC, datetime
from io import BytesIO
from typing import Any

import dateutil.parser
import feedparser
import pydantic
import structlog

from learning_feeds.core.entity.feed_item import FeedItem
from learning_feeds.core.repository.feed_content import FeedContentParseError
from learning_feeds.data.external.payloads import (
    FeedPayload,
    JsonFeedItem,
    Rss2JsonPayload,
    ServerlessPayload,
    WrappedXmlPayload,
    decode_items,
    decode_payload,
)
from learning_feeds.utils.dtime import ensure_aware, now_aware
from learning_feeds.utils.text import clean_description, clean_text

logger = structlog.get_logger()

UNTITLED = "Untitled"


class _FeedItemParseError(Exception):
    """internal exception for handling badly formatted feed items"""


class FeedNormalizer:
    """
    Turns rss/atom documents and the json responses of rss proxies
    into a list of FeedItem of the same shape.
    """

    def __init__(self, *, max_items: int = 15, description_max_length: int = 250) -> None:
        self.max_items = max_items
        self.description_max_length = description_max_length

    def normalize(
        self,
        payload: str | bytes | dict[str, Any] | list[Any],
        source_key: str,
    ) -> list[FeedItem]:
        if isinstance(payload, str | bytes):
            return self._normalize_xml(payload, source_key)

        if isinstance(payload, dict):
            return self.normalize_decoded(decode_payload(payload), source_key)

        if isinstance(payload, list):
            return self._normalize_json_items(decode_items(payload), source_key)

        raise FeedContentParseError(f"unsupported payload type {type(payload).__name__}")

    def normalize_decoded(self, payload: FeedPayload, source_key: str) -> list[FeedItem]:
        if isinstance(payload, Rss2JsonPayload):
            if payload.status != "ok":
                raise FeedContentParseError(
                    f"rss2json error: {payload.message or payload.status}"
                )
            return self._normalize_json_items(payload.items, source_key)

        if isinstance(payload, ServerlessPayload):
            return self._normalize_json_items(payload.items, source_key)

        if isinstance(payload, WrappedXmlPayload):
            return self._normalize_xml(payload.contents, source_key)

        raise FeedContentParseError(f"unsupported payload {type(payload).__name__}")

    def _normalize_xml(self, content: str | bytes, source_key: str) -> list[FeedItem]:
        if isinstance(content, str):
            content = content.encode("utf-8")

        try:
            rss = feedparser.parse(BytesIO(content))
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to parse feed", source=source_key, error=exc)
            raise FeedContentParseError(f"failed to parse contents of {source_key=}") from exc

        # feedparser leaves the version empty when there is no rss channel or atom feed root
        if not (version := rss.get("version")):
            raise FeedContentParseError(
                f"contents of {source_key=} is neither rss nor atom"
            ) from rss.get("bozo_exception")

        if parsed_exc := rss.get("bozo_exception"):
            logger.debug("Feed is not well-formed", source=source_key, error=parsed_exc)

        prefer_updated = version.startswith("atom")
        items = []

        for entry in rss["entries"]:
            if prefer_updated:
                date_str = entry.get("updated") or entry.get("published")
            else:
                date_str = entry.get("published") or entry.get("updated")

            content_values = entry.get("content") or [{}]

            try:
                item = self._build_item(
                    source_key=source_key,
                    title=entry.get("title"),
                    link=entry.get("link") or entry.get("id"),
                    description=entry.get("summary") or content_values[0].get("value"),
                    published_at=self._parse_date(date_str),
                    guid=entry.get("id"),
                    author=entry.get("author"),
                )
            except _FeedItemParseError as exc:
                logger.warning("Failed to parse feed item", source=source_key, error=exc)
                continue

            items.append(item)

        # upstream order is kept, only the first items are used
        return items[: self.max_items]

    def _normalize_json_items(
        self,
        raw_items: list[dict[str, Any]],
        source_key: str,
    ) -> list[FeedItem]:
        items = []

        for raw_item in raw_items:
            try:
                json_item = JsonFeedItem.model_validate(raw_item)
            except pydantic.ValidationError as exc:
                logger.warning("Failed to validate feed item", source=source_key, error=exc)
                continue

            published: Any = json_item.pub_date or json_item.iso_date or json_item.published
            try:
                item = self._build_item(
                    source_key=source_key,
                    title=json_item.title,
                    link=json_item.link or json_item.url,
                    description=json_item.description or json_item.content,
                    published_at=self._parse_date(published),
                    guid=json_item.guid or json_item.id,
                    author=json_item.author,
                )
            except _FeedItemParseError as exc:
                logger.warning("Failed to parse feed item", source=source_key, error=exc)
                continue

            items.append(item)

        return items[: self.max_items]

    def _build_item(
        self,
        *,
        source_key: str,
        title: str | None,
        link: str | None,
        description: str | None,
        published_at: datetime,
        guid: str | None,
        author: str | None,
    ) -> FeedItem:
        title = clean_text(title) or UNTITLED
        link = (link or "").strip()
        description = clean_description(description, max_length=self.description_max_length)
        unique_id = (
            (guid or "").strip() or link or self._content_hash(source_key, title, description)
        )

        try:
            return FeedItem(
                title=title,
                link=link,
                description=description,
                published_at=published_at,
                unique_id=unique_id,
                author=clean_text(author) or None,
            )
        except pydantic.ValidationError as exc:
            raise _FeedItemParseError("failed to validate feed item fields") from exc

    def _parse_date(self, value: str | int | float | None) -> datetime:
        if isinstance(value, int | float):
            try:
                return datetime.fromtimestamp(value / 1000, tz=UTC)
            except (OverflowError, OSError, ValueError) as exc:
                logger.debug("Failed to parse feed item timestamp", value=value, error=exc)
                return now_aware()

        if not value:
            return now_aware()

        try:
            return ensure_aware(dateutil.parser.parse(value))
        except (OverflowError, ValueError) as exc:
            logger.debug("Failed to parse feed item date", value=value, error=exc)
            return now_aware()

    def _content_hash(self, source_key: str, title: str, description: str) -> str:
        digest = hashlib.sha1(
            "\n".join([source_key, title, description]).encode("utf-8"),
            usedforsecurity=False,
        ).hexdigest()
        return f"sha1:{digest}"
