import os
import tempfile
from pathlib import Path

import pytest

os.environ.setdefault("MODE", "test")

from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool
from httpx import AsyncClient, ASGITransport

from main import app as fastapi_app
import db as project_db
import db_models  # ensure models are imported
from config.database import get_sync_url
from db_base import Base

_TMP_DIR = tempfile.mkdtemp(prefix="asset-registry-tests-")
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL") or (
    f"sqlite+aiosqlite:///{Path(_TMP_DIR) / 'test.db'}"
)


sync_url = get_sync_url(TEST_DATABASE_URL)

# Use an async engine for app interactions
engine = create_async_engine(
    TEST_DATABASE_URL,
    future=True,
    echo=False,
    poolclass=NullPool  # Disable connection pooling for tests
)
AsyncSessionTest = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False
)

# Children first so deletes never trip a foreign key
_TABLES_IN_DELETE_ORDER = ("notes", "cases", "projects", "assets", "users")


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture(scope="session")
def sync_engine():
    engine = create_engine(sync_url)
    yield engine
    engine.dispose()


@pytest.fixture(scope="session", autouse=True)
def prepare_db(sync_engine):
    # Create/drop tables for tests (Destructive - use a dedicated test DB)
    Base.metadata.drop_all(bind=sync_engine)
    Base.metadata.create_all(bind=sync_engine)
    yield
    Base.metadata.drop_all(bind=sync_engine)


@pytest.fixture(autouse=True)
def clean_tables(prepare_db, sync_engine):
    """Every test starts from empty tables."""
    yield
    with sync_engine.begin() as conn:
        for name in _TABLES_IN_DELETE_ORDER:
            conn.execute(Base.metadata.tables[name].delete())


@pytest.fixture
async def db_session():
    async with AsyncSessionTest() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def async_client():
    # Override the get_session dependency to create a fresh session for each request
    async def override_get_session():
        async with AsyncSessionTest() as session:
            yield session

    fastapi_app.dependency_overrides[project_db.get_session] = override_get_session

    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url="http://testserver") as ac:
        yield ac

    # Clean up
    fastapi_app.dependency_overrides.clear()


# ---------- Payload helpers ----------

def asset_payload(name: str = "Warehouse A", **overrides) -> dict:
    payload = {
        "name": name,
        "description": f"{name} description",
        "location": {"lat": 14.5995, "lng": 120.9842},
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def create_asset(async_client):
    async def _create(name: str = "Warehouse A", **overrides) -> dict:
        resp = await async_client.post("/api/v1/assets", json=asset_payload(name, **overrides))
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create


@pytest.fixture
def create_project(async_client):
    async def _create(name: str = "Project Alpha", **overrides) -> dict:
        payload = {"name": name, **overrides}
        resp = await async_client.post("/api/v1/projects", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create


@pytest.fixture
def create_case(async_client):
    async def _create(case_no: str = "CV-2024-001", **overrides) -> dict:
        payload = {"rtc": "RTC Branch 12", "case_no": case_no, **overrides}
        resp = await async_client.post("/api/v1/cases", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create
