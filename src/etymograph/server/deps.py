"""
Shared dependencies for routes.
"""

from etymograph.core.config import Settings, get_settings
from etymograph.core.engine import Engine, get_engine
from etymograph.core.sampling import SamplingTableStore


def get_table_store(settings: Settings | None = None) -> SamplingTableStore | None:
    settings = settings or get_settings()
    if not settings.use_redis:
        return None
    return SamplingTableStore.from_settings(settings)


def get_word_engine() -> Engine:
    return get_engine()
