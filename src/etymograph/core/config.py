"""
Settings read from the environment (and a local .env file, if present).
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


DEFAULT_DATA_PATH = "data/full-data.json"
DEFAULT_STATS_PATH = "data/word-stats.json"
DEFAULT_MAX_DEPTH = 3


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _get_list(name: str, default: list[str]) -> list[str]:
    value = os.getenv(name)
    if not value:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    data_path: str = DEFAULT_DATA_PATH
    stats_path: str = DEFAULT_STATS_PATH
    max_depth: int = DEFAULT_MAX_DEPTH
    api_url: str = "http://localhost:8000/api"
    use_redis: bool = False
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    cors_origins: list[str] = field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:5173"]
    )

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        return cls(
            data_path=os.getenv("ETYMOGRAPH_DATA_PATH", defaults.data_path),
            stats_path=os.getenv("ETYMOGRAPH_STATS_PATH", defaults.stats_path),
            max_depth=int(os.getenv("ETYMOGRAPH_MAX_DEPTH", defaults.max_depth)),
            api_url=os.getenv("ETYMOGRAPH_API_URL", defaults.api_url),
            use_redis=_get_bool("ETYMOGRAPH_USE_REDIS", defaults.use_redis),
            redis_host=os.getenv("REDIS_HOST", defaults.redis_host),
            redis_port=int(os.getenv("REDIS_PORT", defaults.redis_port)),
            redis_db=int(os.getenv("REDIS_DB", defaults.redis_db)),
            cors_origins=_get_list("ETYMOGRAPH_CORS_ORIGINS", defaults.cors_origins),
        )


def get_settings() -> Settings:
    return Settings.from_env()
