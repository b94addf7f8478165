import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from lumastack import __version__
from lumastack.core.config import DatabaseSettings
from lumastack.infrastructure.database import Base, Database


async def _create(client, username="alice", email="a@x.com", password="password123", **extra):
    return await client.post(
        "/api/users",
        json={"username": username, "email": email, "password": password, **extra},
    )


@pytest.mark.asyncio
async def test_root(client):
    resp = await client.get("/")
    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == "LumaStack API"
    assert data["status"] == "operational"
    assert data["version"] == __version__
    assert data["environment"] == "test"
    assert "health" in data["endpoints"]


@pytest.mark.asyncio
async def test_health_reports_database(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "database": "healthy", "version": __version__}


@pytest.mark.asyncio
async def test_health_reports_unreachable_database(client, container, tmp_path):
    broken = Database.from_settings(
        DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'nested' / 'db.sqlite'}")
    )
    container.database = broken
    try:
        resp = await client.get("/health")
    finally:
        await broken.dispose()

    assert resp.status_code == 200
    assert resp.json()["database"] == "unhealthy"


@pytest.mark.asyncio
async def test_create_user(client):
    resp = await _create(client)
    assert resp.status_code == 201
    data = resp.json()
    assert data["username"] == "alice"
    assert data["email"] == "a@x.com"
    assert data["role"] == "user"
    assert data["is_active"] is True
    assert "password_hash" not in data
    assert "password" not in data


@pytest.mark.asyncio
async def test_create_duplicate_user_conflicts(client):
    await _create(client)
    resp = await _create(client, username="alice2")
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_create_user_validation(client):
    resp = await _create(client, email="no-at-sign")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "email must contain '@'"

    resp = await _create(client, password="short")
    assert resp.status_code == 400

    resp = await client.post("/api/users", json={"username": "alice"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_get_user(client):
    created = (await _create(client)).json()

    resp = await client.get(f"/api/users/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == created

    resp = await client.get("/api/users/999")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_patch_user_is_partial(client):
    created = (await _create(client)).json()

    resp = await client.patch(f"/api/users/{created['id']}", json={"email": "new@x.com"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["email"] == "new@x.com"
    assert data["username"] == "alice"
    assert data["role"] == "user"

    resp = await client.patch("/api/users/999", json={"email": "new@x.com"})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_user_deactivates(client):
    created = (await _create(client)).json()

    for _ in range(2):
        resp = await client.delete(f"/api/users/{created['id']}")
        assert resp.status_code == 200
        assert resp.json()["is_active"] is False

    resp = await client.get(f"/api/users/{created['id']}")
    assert resp.status_code == 200
    assert resp.json()["is_active"] is False

    resp = await client.get("/api/users")
    assert resp.json() == []


@pytest.mark.asyncio
async def test_list_users(client):
    for i in range(3):
        await _create(client, username=f"user{i}", email=f"user{i}@x.com")

    resp = await client.get("/api/users", params={"limit": 2})
    assert resp.status_code == 200
    assert [u["username"] for u in resp.json()] == ["user2", "user1"]

    resp = await client.get("/api/users", params={"limit": 2, "offset": 2})
    assert [u["username"] for u in resp.json()] == ["user0"]

    resp = await client.get("/api/users", params={"limit": -1})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_store_failure_maps_to_503_without_driver_details(client, database):
    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    resp = await client.get("/api/users")
    assert resp.status_code == 503
    assert resp.json() == {"detail": "store unavailable"}


@pytest.mark.asyncio
async def test_failed_commit_is_reported_not_acknowledged(client, store, monkeypatch):
    async def failing_commit(self):
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(AsyncSession, "commit", failing_commit)
    resp = await _create(client)
    monkeypatch.undo()

    assert resp.status_code == 503
    assert resp.json() == {"detail": "store unavailable"}
    assert await store.list_accounts(limit=10, offset=0) == []
