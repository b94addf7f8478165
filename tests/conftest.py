import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import delete

from lumastack.core.config import DatabaseSettings, SecuritySettings, Settings
from lumastack.core.container import ApplicationContainer
from lumastack.infrastructure.database import Database, UserModel
from lumastack.infrastructure.database.repositories import AccountStore
from lumastack.main import create_app
from lumastack.modules.accounts import AccountCreateInput, AccountRole


class FakeHasher:
    """Cheap deterministic stand-in for bcrypt."""

    def __init__(self) -> None:
        self.calls = 0

    def hash(self, password: str) -> str:
        self.calls += 1
        return f"fake${password[::-1]}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"fake${password[::-1]}"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        environment="test",
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"),
        security=SecuritySettings(bcrypt_rounds=4),
    )


@pytest_asyncio.fixture
async def database(settings):
    database = Database.from_settings(settings.database)
    await database.create_all()
    yield database
    await database.dispose()


@pytest.fixture
def hasher():
    return FakeHasher()


@pytest.fixture
def store(database):
    return AccountStore(database)


@pytest.fixture
def make_account(store):
    async def _make(username, email=None, role=AccountRole.USER, password="password123"):
        payload = AccountCreateInput(
            username=username,
            email=email or f"{username}@example.com",
            password=password,
            role=role,
        )
        return await store.create(payload, f"hash-of-{username}")

    return _make


@pytest.fixture
def hard_delete(database):
    """Remove a row for good; only tests are allowed to do this."""

    async def _delete(account_id: int) -> int:
        async with database.session() as session:
            result = await session.execute(delete(UserModel).where(UserModel.id == account_id))
            return result.rowcount

    return _delete


@pytest.fixture
def container(settings, database, hasher):
    return ApplicationContainer(settings=settings, database=database, hasher=hasher)


@pytest_asyncio.fixture
async def client(container):
    app = create_app(container.settings)
    app.state.container = container

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
