import pytest

from lumastack.modules.accounts import (
    AccountAlreadyExistsError,
    AccountConflictError,
    AccountRole,
    AccountValidationError,
    AccountView,
    create_admin,
)


class SpyRepository:
    """Delegates to the real store and records which calls were made."""

    def __init__(self, store):
        self._store = store
        self.calls = []

    def __getattr__(self, name):
        target = getattr(self._store, name)

        async def _call(*args, **kwargs):
            self.calls.append(name)
            return await target(*args, **kwargs)

        return _call


class ScriptedPrompter:
    def __init__(self, email="admin@site.com", username="root", password=("longenough1", "longenough1")):
        self.email = email
        self.username = username
        self.password = password
        self.asked = []

    def ask_email(self):
        self.asked.append("email")
        return self.email

    def ask_username(self):
        self.asked.append("username")
        return self.username

    def ask_password(self):
        self.asked.append("password")
        return self.password


@pytest.fixture
def spy(store):
    return SpyRepository(store)


@pytest.mark.asyncio
async def test_bootstrap_creates_admin(store, hasher):
    view = await create_admin(
        store,
        hasher,
        email="admin@site.com",
        username="root",
        password="longenough1",
    )

    assert isinstance(view, AccountView)
    assert view.role is AccountRole.ADMIN
    assert view.is_active is True
    assert view.username == "root"
    assert not hasattr(view, "password_hash")

    stored = await store.get_by_email("admin@site.com")
    assert stored.id == view.id
    assert stored.password_hash == hasher.hash("longenough1")


@pytest.mark.asyncio
async def test_invalid_email_fails_before_store_access(spy, hasher, store):
    with pytest.raises(AccountValidationError, match="email must contain '@'"):
        await create_admin(
            spy,
            hasher,
            email="no-at-sign",
            username="root",
            password="longenough1",
        )

    assert spy.calls == []
    assert hasher.calls == 0
    assert await store.list_accounts(limit=10, offset=0) == []


@pytest.mark.asyncio
async def test_existing_email_conflicts_before_hashing(spy, hasher, make_account):
    await make_account("someone", "admin@site.com")

    with pytest.raises(AccountConflictError, match="account already exists for this email"):
        await create_admin(
            spy,
            hasher,
            email="admin@site.com",
            username="root",
            password="longenough1",
        )

    assert spy.calls == ["get_by_email"]
    assert hasher.calls == 0


@pytest.mark.asyncio
async def test_deactivated_email_still_conflicts(store, hasher, make_account):
    account = await make_account("someone", "admin@site.com")
    await store.deactivate(account.id)

    with pytest.raises(AccountConflictError):
        await create_admin(
            store,
            hasher,
            email="admin@site.com",
            username="root",
            password="longenough1",
        )


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "username, password, message",
    [
        ("ro", "longenough1", "username too short"),
        ("root", "short", "secret too short"),
    ],
)
async def test_invalid_username_or_password(spy, hasher, username, password, message):
    with pytest.raises(AccountValidationError, match=message):
        await create_admin(spy, hasher, email="admin@site.com", username=username, password=password)

    assert "create" not in spy.calls
    assert hasher.calls == 0


@pytest.mark.asyncio
async def test_prompts_in_pipeline_order(store, hasher):
    prompter = ScriptedPrompter()

    view = await create_admin(store, hasher, prompter=prompter)

    assert prompter.asked == ["email", "username", "password"]
    assert view.email == "admin@site.com"
    assert view.role is AccountRole.ADMIN


@pytest.mark.asyncio
async def test_prompted_email_conflict_stops_before_username(store, hasher, make_account):
    await make_account("someone", "admin@site.com")
    prompter = ScriptedPrompter()

    with pytest.raises(AccountConflictError):
        await create_admin(store, hasher, prompter=prompter)

    assert prompter.asked == ["email"]


@pytest.mark.asyncio
async def test_only_missing_values_are_prompted(store, hasher):
    prompter = ScriptedPrompter()

    await create_admin(store, hasher, email="admin@site.com", username="root", prompter=prompter)

    assert prompter.asked == ["password"]


@pytest.mark.asyncio
async def test_password_confirmation_mismatch(spy, hasher):
    prompter = ScriptedPrompter(password=("longenough1", "longenough2"))

    with pytest.raises(AccountValidationError, match="secrets do not match"):
        await create_admin(spy, hasher, email="admin@site.com", username="root", prompter=prompter)

    assert "create" not in spy.calls


@pytest.mark.asyncio
async def test_missing_value_without_prompter(spy, hasher):
    with pytest.raises(AccountValidationError, match="email is required"):
        await create_admin(spy, hasher, username="root", password="longenough1")
    assert spy.calls == []


@pytest.mark.asyncio
async def test_taken_username_propagates_store_error(store, hasher, make_account):
    await make_account("root", "someone@site.com")

    with pytest.raises(AccountAlreadyExistsError):
        await create_admin(
            store,
            hasher,
            email="admin@site.com",
            username="root",
            password="longenough1",
        )


@pytest.mark.asyncio
async def test_overlong_username_is_a_validation_error(spy, hasher):
    with pytest.raises(AccountValidationError, match="username too long"):
        await create_admin(spy, hasher, email="admin@site.com", username="r" * 51, password="longenough1")

    assert "create" not in spy.calls
    assert hasher.calls == 0
