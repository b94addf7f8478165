"""Domain services for account management."""

from __future__ import annotations

from typing import Sequence

from lumastack.core.crypto import PasswordHasher

from .exceptions import AccountNotFoundError
from .models import (
    Account,
    AccountCreateInput,
    AccountPatch,
    AccountRole,
    AccountUpdateInput,
    UNSET,
)
from .repository import AccountRepository
from .validators import validate_email, validate_page, validate_password, validate_username


class AccountService:
    """Encapsulates core account use cases."""

    def __init__(self, repository: AccountRepository, hasher: PasswordHasher) -> None:
        self._repository = repository
        self._hasher = hasher

    async def get(self, account_id: int) -> Account:
        return await self._repository.get_by_id(account_id)

    async def get_by_email(self, email: str) -> Account:
        return await self._repository.get_by_email(email)

    async def get_by_username(self, username: str) -> Account:
        return await self._repository.get_by_username(username)

    async def list_accounts(self, limit: int, offset: int = 0) -> Sequence[Account]:
        validate_page(limit, offset)
        return await self._repository.list_accounts(limit, offset)

    async def authenticate(self, username: str, password: str) -> Account | None:
        try:
            account = await self._repository.get_by_username(username)
        except AccountNotFoundError:
            return None
        if not account.is_active:
            return None
        if not self._hasher.verify(password, account.password_hash):
            return None
        return account

    async def register(self, payload: AccountCreateInput) -> Account:
        validate_username(payload.username)
        validate_email(payload.email)
        validate_password(payload.password)

        password_hash = self._hasher.hash(payload.password)
        return await self._repository.create(payload, password_hash)

    async def update(self, account_id: int, patch: AccountPatch) -> Account:
        changes = AccountUpdateInput()
        if patch.username is not UNSET:
            changes.username = validate_username(patch.username)
        if patch.email is not UNSET:
            changes.email = validate_email(patch.email)
        if patch.password is not UNSET:
            changes.password_hash = self._hasher.hash(validate_password(patch.password))
        if patch.role is not UNSET:
            changes.role = AccountRole(patch.role)
        if patch.is_active is not UNSET:
            changes.is_active = bool(patch.is_active)

        return await self._repository.update(account_id, changes)

    async def deactivate(self, account_id: int) -> Account:
        return await self._repository.deactivate(account_id)
