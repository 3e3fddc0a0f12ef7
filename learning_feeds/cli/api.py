import os
from pathlib import Path

import click
import uvicorn


@click.command(context_settings={"auto_envvar_prefix": "API"})
@click.option("--host", default="127.0.0.1", help="Host to serve the feeds API on")
@click.option("--port", default=8000, type=click.INT, help="Port to serve the feeds API on")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error", "critical"]),
)
@click.option(
    "--cache-backend",
    type=click.Choice(["memory", "file"]),
    help="Where to keep the cached feeds, overrides FEEDS_CACHE_BACKEND",
)
@click.option(
    "--sources-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON list of extra feed sources, overrides FEEDS_SOURCES_FILE",
)
@click.option(
    "--reload",
    default=False,
    is_flag=True,
    help="Instruct uvicorn to reload on code changes",
)
def api(
    host: str,
    port: int,
    log_level: str,
    cache_backend: str | None,
    sources_file: Path | None,
    reload: bool,  # noqa: FBT001
) -> None:
    # the app factory runs in the uvicorn process and reads its settings from the environment
    if cache_backend is not None:
        os.environ["FEEDS_CACHE_BACKEND"] = cache_backend
    if sources_file is not None:
        os.environ["FEEDS_SOURCES_FILE"] = str(sources_file.resolve())
    os.environ.setdefault("LOG_LEVEL", log_level.upper())

    click.echo(f"Serving feeds API on http://{host}:{port} with logging level={log_level}")

    uvicorn.run(
        "learning_feeds.fastapi.entrypoint:get_asgi_app",
        factory=True,
        host=host,
        port=port,
        log_level=log_level,
        reload=reload,
    )
