from typing import Any

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator

from learning_feeds.core.repository.feed_content import FeedContentParseError


class JsonFeedItem(BaseModel):
    id: str | None = None  # noqa: A003
    guid: str | None = None
    title: str | None = None
    link: str | None = None
    url: str | None = None
    description: str | None = None
    content: str | None = None
    pub_date: str | None = Field(None, alias="pubDate")
    iso_date: str | None = Field(None, alias="isoDate")
    # epoch milliseconds or a date string, depending on the proxy version
    published: str | int | float | None = None
    author: str | None = None

    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)

    @field_validator("author", mode="before")
    @classmethod
    def author_name(cls, value: Any) -> Any:
        # some proxies pass the author through as an object
        if isinstance(value, dict):
            return value.get("name")
        return value


class Rss2JsonPayload(BaseModel):
    """Response of api.rss2json.com"""

    status: str
    message: str | None = None
    items: list[dict[str, Any]] = []  # noqa: RUF012

    model_config = ConfigDict(extra="ignore")


class ServerlessPayload(BaseModel):
    """Response of the rss-to-json serverless api"""

    title: str | None = None
    items: list[dict[str, Any]]

    model_config = ConfigDict(extra="ignore")


class WrappedXmlPayload(BaseModel):
    """Raw feed document wrapped into a json envelope by a cors proxy"""

    contents: str

    model_config = ConfigDict(extra="ignore")


FeedPayload = Rss2JsonPayload | ServerlessPayload | WrappedXmlPayload

# keys are checked in this order, the first one found in a response decides its variant
_VARIANT_PER_KEY: list[tuple[str, type[FeedPayload]]] = [
    ("status", Rss2JsonPayload),
    ("contents", WrappedXmlPayload),
    ("items", ServerlessPayload),
]

# items are validated one by one when normalized, a bad item does not fail its siblings
_JSON_ITEMS_ADAPTER = pydantic.TypeAdapter(list[dict[str, Any]])


def decode_payload(data: dict[str, Any]) -> FeedPayload:
    for key, variant in _VARIANT_PER_KEY:
        if key not in data:
            continue

        try:
            return variant.model_validate(data)
        except pydantic.ValidationError as exc:
            raise FeedContentParseError(f"malformed {variant.__name__} response") from exc

    raise FeedContentParseError(f"unrecognized response shape with keys={sorted(data)}")


def decode_items(data: list[Any]) -> list[dict[str, Any]]:
    try:
        return _JSON_ITEMS_ADAPTER.validate_python(data)
    except pydantic.ValidationError as exc:
        raise FeedContentParseError("malformed json item array") from exc
