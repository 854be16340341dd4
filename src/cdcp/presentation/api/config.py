"""Settings as a FastAPI dependency, overridable per app in tests."""

from functools import lru_cache

from cdcp_config.settings import Settings, get_settings


@lru_cache
def get_api_settings() -> Settings:
    return get_settings()
