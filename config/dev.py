from __future__ import annotations

from config.base import RegistrySettings, env_file_config


class DevSettings(RegistrySettings):
    DATABASE_URL: str
    APP_ENV: str = "dev"
    DEBUG: bool = True

    model_config = env_file_config(".env.dev")
