from collections.abc import Callable, Iterator
from contextlib import contextmanager

import pytest
from pytest_localserver.http import ContentServer

from .types import CreateHttpServersFixtureT


@pytest.fixture()
def create_httpservers() -> CreateHttpServersFixtureT:
    @contextmanager
    def factory(count: int) -> Iterator[list[ContentServer]]:
        servers = [ContentServer() for _ in range(count)]
        for server in servers:
            server.start()

        try:
            yield servers
        finally:
            for server in servers:
                server.stop()

    return factory


@pytest.fixture()
def wrap_rss_content() -> Callable[[str, str], str]:
    def wrapper(channel_title: str, content: str) -> str:
        # fmt: off
        return (
            f"""<?xml version="1.0" encoding="UTF-8"?>
            <rss version="2.0">
              <channel>
                <title>{channel_title}</title>
                <link>https://example.com/</link>
                <description>{channel_title} feed</description>
                {content}
              </channel>
            </rss>
            """
        )
        # fmt: on

    return wrapper
