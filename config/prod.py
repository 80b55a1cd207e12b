from __future__ import annotations

from config.base import RegistrySettings, env_file_config


class ProdSettings(RegistrySettings):
    DATABASE_URL: str
    APP_ENV: str = "production"

    model_config = env_file_config(".env.production")
