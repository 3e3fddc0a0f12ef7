from collections.abc import Iterator

import pytest
from fastapi import FastAPI

from learning_feeds.application import di
from learning_feeds.application.di import Container
from learning_feeds.fastapi import entrypoint as api_entrypoint

pytest_plugins = [
    "tests.pytest_fixtures.api",
    "tests.pytest_fixtures.http",
]


@pytest.fixture(scope="session")
def container() -> Container:
    return di.init()


@pytest.fixture()
def fastapi_app(container: Container) -> Iterator[FastAPI]:
    app = api_entrypoint.init(container)
    yield app
    app.dependency_overrides.clear()
