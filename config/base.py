from __future__ import annotations

import json
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

ROOT = Path(__file__).resolve().parents[1]

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
]


def env_file_config(file_name: str) -> SettingsConfigDict:
    """Read `env/<file_name>` when it exists, otherwise only the process env."""
    env_file = ROOT / "env" / file_name
    return SettingsConfigDict(
        env_file=str(env_file) if env_file.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )


class RegistrySettings(BaseSettings):
    """Settings shared by every deployment of the registry API."""

    APP_ENV: str = "local"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    # JSON array or comma-separated list; empty means the local dev origins
    CORS_ORIGINS: str = ""

    @property
    def cors_origins(self) -> list[str]:
        raw = self.CORS_ORIGINS.strip()
        if not raw:
            return list(DEFAULT_CORS_ORIGINS)
        try:
            origins = json.loads(raw)
        except json.JSONDecodeError:
            return [o.strip() for o in raw.split(",") if o.strip()]
        if isinstance(origins, list):
            return [str(o) for o in origins]
        return list(DEFAULT_CORS_ORIGINS)
