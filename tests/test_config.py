import pytest

from config.base import DEFAULT_CORS_ORIGINS
from config.database import get_database_url, get_sync_url
from config.stage import StageSettings
from config.test import TestSettings as SuiteSettings


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("", DEFAULT_CORS_ORIGINS),
        ('["https://a.example", "https://b.example"]', ["https://a.example", "https://b.example"]),
        ("https://a.example, https://b.example,", ["https://a.example", "https://b.example"]),
    ],
)
def test_cors_origins(raw, expected):
    assert SuiteSettings(CORS_ORIGINS=raw).cors_origins == expected


def test_database_url_escapes_credentials():
    url = get_database_url("postgresql+asyncpg", "db", 5432, "registry", "p@ss", "assets")
    assert url == "postgresql+asyncpg://registry:p%40ss@db:5432/assets"


def test_stage_settings_assemble_url():
    settings = StageSettings(DB_HOST="db.internal", DB_USER="app", DB_PASSWORD="pw", DB_NAME="registry")
    assert settings.DATABASE_URL == "postgresql+asyncpg://app:pw@db.internal:5432/registry"


@pytest.mark.parametrize(
    "async_url, expected",
    [
        ("postgresql+asyncpg://u:p@db:5432/registry", "postgresql+psycopg2://u:p@db:5432/registry"),
        ("sqlite+aiosqlite:///./registry.db", "sqlite:///./registry.db"),
        ("postgresql://u:p@db/registry", "postgresql://u:p@db/registry"),
    ],
)
def test_sync_url(async_url, expected):
    assert get_sync_url(async_url) == expected
