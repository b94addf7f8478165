"""Repository protocol for accounts."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import Account, AccountCreateInput, AccountUpdateInput


class AccountRepository(Protocol):
    """Abstract repository interface for account persistence.

    Lookups raise ``AccountNotFoundError`` instead of returning ``None`` and
    are not filtered by ``is_active``. Duplicate usernames or emails surface
    as ``AccountAlreadyExistsError``; every other store problem surfaces as
    ``StoreFailureError``.
    """

    async def create(self, payload: AccountCreateInput, password_hash: str) -> Account:
        ...

    async def get_by_id(self, account_id: int) -> Account:
        ...

    async def get_by_email(self, email: str) -> Account:
        ...

    async def get_by_username(self, username: str) -> Account:
        ...

    async def list_accounts(self, limit: int, offset: int) -> Sequence[Account]:
        ...

    async def update(self, account_id: int, payload: AccountUpdateInput) -> Account:
        ...

    async def deactivate(self, account_id: int) -> Account:
        ...
