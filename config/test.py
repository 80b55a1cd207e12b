from __future__ import annotations

from config.base import RegistrySettings, env_file_config


class TestSettings(RegistrySettings):
    # The test suite overrides the session dependency; this is only a fallback.
    DATABASE_URL: str = "sqlite+aiosqlite:///./asset_registry_test.db"
    APP_ENV: str = "test"
    LOG_LEVEL: str = "WARNING"
    LOG_JSON: bool = False

    model_config = env_file_config(".env.test")
