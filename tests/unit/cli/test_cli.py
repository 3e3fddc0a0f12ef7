import importlib
import json
from unittest import mock

import pytest
from click.testing import CliRunner
from structlog.testing import capture_logs

from learning_feeds.application.settings import FeedSettings, LoggingSettings
from learning_feeds.cli import main
from learning_feeds.cli.worker import check_cache_backend, refresh_feeds
from learning_feeds.core.entity.feed_result import AggregateFeedResult
from learning_feeds.core.usecase.get_feeds import GetFeedsInput, GetFeedsOutput, GetFeedsUseCase
from learning_feeds.utils.dtime import now_aware
from tests.factories import SourceFetchResultFactory

# the cli package exposes the click commands under the names of their modules
fetch_module = importlib.import_module("learning_feeds.cli.fetch")


def make_container(uc: mock.Mock) -> mock.Mock:
    container = mock.Mock()
    container.settings.logging.return_value = LoggingSettings()
    container.use_cases.get_feeds.return_value = uc
    return container


def test_fetch_prints_feeds() -> None:
    feeds = AggregateFeedResult(results=SourceFetchResultFactory.batch(2), timestamp=now_aware())
    uc = mock.Mock(spec=GetFeedsUseCase)
    uc.execute.return_value = GetFeedsOutput(feeds=feeds, from_cache=False)

    with (
        mock.patch("learning_feeds.application.di.init", return_value=make_container(uc)),
        mock.patch.object(fetch_module, "configure_logging") as configure_logging_mock,
    ):
        result = CliRunner().invoke(main, ["fetch", "--refresh"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["total_count"] == 2
    assert "Fetched 2/2 sources" in result.stderr
    configure_logging_mock.assert_called_once_with(LoggingSettings())

    uc.execute.assert_called_once_with(GetFeedsInput(force_refresh=True))


async def test_worker_survives_failed_refresh() -> None:
    uc = mock.Mock(spec=GetFeedsUseCase)
    uc.execute.side_effect = RuntimeError("boom")

    await refresh_feeds(make_container(uc))

    uc.execute.assert_called_once_with(GetFeedsInput())


@pytest.mark.parametrize(
    ("cache_backend", "warned"),
    [
        ("memory", True),
        ("file", False),
    ],
)
def test_worker_warns_about_process_local_cache(cache_backend: str, warned: bool) -> None:
    with capture_logs() as logs:
        check_cache_backend(FeedSettings(cache_backend=cache_backend))

    assert [log["log_level"] for log in logs] == (["warning"] if warned else [])
