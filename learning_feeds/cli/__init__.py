import click

from learning_feeds.cli.api import api
from learning_feeds.cli.fetch import fetch
from learning_feeds.cli.worker import worker


@click.group(help="Fetch, cache and serve the learning feeds.")
@click.version_option(package_name="learning-feeds")
def main() -> None:
    ...


main.add_command(api)
main.add_command(fetch)
main.add_command(worker)
