import asyncio

import click

from learning_feeds.application import di
from learning_feeds.application.di import Container
from learning_feeds.application.logging import configure_logging
from learning_feeds.core.usecase.get_feeds import GetFeedsInput, GetFeedsOutput


@click.command()
@click.option(
    "--refresh",
    default=False,
    is_flag=True,
    help="Ignore the cached feeds and fetch every source again",
)
@click.option("--indent", default=2, type=click.INT, help="Indentation of the printed json")
def fetch(
    refresh: bool,  # noqa: FBT001
    indent: int,
) -> None:
    container = di.init()
    configure_logging(container.settings.logging())

    uc_result = asyncio.run(run(container, force_refresh=refresh))

    click.echo(uc_result.feeds.model_dump_json(indent=indent))
    click.echo(
        f"Fetched {uc_result.feeds.success_count}/{uc_result.feeds.total_count} sources "
        f"(from_cache={uc_result.from_cache}, cache_age_s={uc_result.cache_age_s})",
        err=True,
    )


async def run(container: Container, *, force_refresh: bool) -> GetFeedsOutput:
    uc = container.use_cases.get_feeds()
    return await uc.execute(GetFeedsInput(force_refresh=force_refresh))
