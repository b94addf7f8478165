"""Account repository that runs every call in its own transaction."""

from __future__ import annotations

from typing import Sequence

from lumastack.infrastructure.database.session import Database
from lumastack.modules.accounts.models import Account, AccountCreateInput, AccountUpdateInput
from lumastack.modules.accounts.repository import AccountRepository

from .account_repository import SqlAccountRepository


class AccountStore(AccountRepository):
    """Session-per-call wrapper around ``SqlAccountRepository``.

    Used where no request-scoped session exists (the CLI). A failed call
    rolls back only its own work.
    """

    def __init__(self, database: Database) -> None:
        self._database = database

    async def create(self, payload: AccountCreateInput, password_hash: str) -> Account:
        async with self._database.session() as session:
            return await SqlAccountRepository(session).create(payload, password_hash)

    async def get_by_id(self, account_id: int) -> Account:
        async with self._database.session() as session:
            return await SqlAccountRepository(session).get_by_id(account_id)

    async def get_by_email(self, email: str) -> Account:
        async with self._database.session() as session:
            return await SqlAccountRepository(session).get_by_email(email)

    async def get_by_username(self, username: str) -> Account:
        async with self._database.session() as session:
            return await SqlAccountRepository(session).get_by_username(username)

    async def list_accounts(self, limit: int, offset: int) -> Sequence[Account]:
        async with self._database.session() as session:
            return await SqlAccountRepository(session).list_accounts(limit, offset)

    async def update(self, account_id: int, payload: AccountUpdateInput) -> Account:
        async with self._database.session() as session:
            return await SqlAccountRepository(session).update(account_id, payload)

    async def deactivate(self, account_id: int) -> Account:
        async with self._database.session() as session:
            return await SqlAccountRepository(session).deactivate(account_id)
