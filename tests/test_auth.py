import uuid

import pytest
from sqlalchemy import select

from core.security import verify_password
from db_models.user import User


@pytest.mark.anyio
async def test_register_user(async_client, db_session):
    resp = await async_client.post(
        "/api/v1/auth/register",
        json={"email": "Ana@Example.com", "password": "s3cret-pass", "full_name": "Ana Cruz"},
    )
    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert data["email"] == "ana@example.com"
    assert data["is_active"] is True
    assert "hashed_password" not in data

    result = await db_session.execute(select(User).where(User.email == "ana@example.com"))
    user = result.scalar_one()
    assert user.hashed_password != "s3cret-pass"
    assert verify_password("s3cret-pass", user.hashed_password)


@pytest.mark.anyio
async def test_register_duplicate_email_is_409(async_client):
    payload = {"email": "dup@example.com", "password": "password1", "full_name": "Dup"}
    resp = await async_client.post("/api/v1/auth/register", json=payload)
    assert resp.status_code == 201

    payload["email"] = "DUP@example.com"
    resp = await async_client.post("/api/v1/auth/register", json=payload)
    assert resp.status_code == 409
    assert resp.json()["detail"] == "Email already registered"


@pytest.mark.anyio
async def test_register_validation(async_client):
    resp = await async_client.post(
        "/api/v1/auth/register",
        json={"email": "not-an-email", "password": "short", "full_name": ""},
    )
    assert resp.status_code == 400
    paths = {e["path"] for e in resp.json()["errors"]}
    assert paths == {"email", "password", "full_name"}


@pytest.mark.anyio
async def test_list_users(async_client):
    for i in range(3):
        resp = await async_client.post(
            "/api/v1/auth/register",
            json={"email": f"user{i}@example.com", "password": "password1", "full_name": f"User {i}"},
        )
        assert resp.status_code == 201

    resp = await async_client.get("/api/v1/auth/users?limit=2")
    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 3
    assert len(body["users"]) == 2


@pytest.mark.anyio
async def test_health(async_client):
    resp = await async_client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy"}
    assert "X-Request-ID" in resp.headers


@pytest.mark.anyio
async def test_register_rejects_password_bcrypt_cannot_hash(async_client):
    resp = await async_client.post(
        "/api/v1/auth/register",
        json={"email": "long@example.com", "password": "x" * 73, "full_name": "Long"},
    )
    assert resp.status_code == 400
    assert [e["path"] for e in resp.json()["errors"]] == ["password"]


@pytest.mark.anyio
async def test_request_id_is_echoed_only_when_well_formed(async_client):
    resp = await async_client.get("/health", headers={"X-Request-ID": "req-42.a:b"})
    assert resp.headers["X-Request-ID"] == "req-42.a:b"

    for bad in ("x" * 65, "has space", "semi;colon"):
        resp = await async_client.get("/health", headers={"X-Request-ID": bad})
        echoed = resp.headers["X-Request-ID"]
        assert echoed != bad
        assert uuid.UUID(echoed)
