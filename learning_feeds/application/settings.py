from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

StrategyName = Literal["rss2json", "allorigins", "serverless", "direct"]


class ApplicationSettings(BaseSettings):
    name: str = "Learning Feeds"

    release_ver: str = "development"
    release_commit: str = "unknown"

    model_config = SettingsConfigDict(env_prefix="APP_")


class FeedSettings(BaseSettings):
    fetch_timeout_s: int = 8
    max_body_size_b: int = 1024 * 1024 * 5  # 5MB
    max_items_per_source: int = 15
    description_max_length: int = 250
    user_agent: str = "LearningOS/1.0"

    # strategies are tried in this order until one yields items
    fetch_strategies: Annotated[list[StrategyName], NoDecode] = [  # noqa: RUF012
        "rss2json",
        "allorigins",
        "serverless",
        "direct",
    ]
    rss2json_url: str = "https://api.rss2json.com/v1/api.json"
    allorigins_url: str = "https://api.allorigins.win/raw"
    serverless_url: str = "https://rss-to-json-serverless-api.vercel.app/api"

    cache_backend: Literal["memory", "file"] = "memory"
    cache_dir: Path = Path(".cache/learning_feeds")
    cache_key: str = "learningos_feeds_cache"
    cache_ttl_s: int = 15 * 60

    sources_file: Path | None = None

    model_config = SettingsConfigDict(env_prefix="FEEDS_")

    @field_validator("fetch_strategies", mode="before")
    @classmethod
    def split_fetch_strategies(cls, value: Any) -> Any:
        # env value is a comma separated list, e.g. "rss2json,direct"
        if isinstance(value, str):
            return [name.strip() for name in value.split(",") if name.strip()]
        return value


class LoggingSettings(BaseSettings):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_format: bool = False

    model_config = SettingsConfigDict(env_prefix="LOG_")
