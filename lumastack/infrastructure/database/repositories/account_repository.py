"""SQLAlchemy implementation of the account repository."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func

from lumastack.infrastructure.database.models import UserModel
from lumastack.modules.accounts.exceptions import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    StoreFailureError,
)
from lumastack.modules.accounts.models import (
    Account,
    AccountCreateInput,
    AccountRole,
    AccountUpdateInput,
)
from lumastack.modules.accounts.repository import AccountRepository
from lumastack.modules.accounts.validators import validate_page

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION_SQLSTATE = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    for attr in ("sqlstate", "pgcode"):
        if getattr(orig, attr, None) == UNIQUE_VIOLATION_SQLSTATE:
            return True
    message = str(orig)
    return "UNIQUE constraint failed" in message or "duplicate key value" in message


class SqlAccountRepository(AccountRepository):
    """Account repository backed by SQLAlchemy models.

    Every write is flushed immediately so constraint violations surface from
    the call that caused them; committing is left to the session owner.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @asynccontextmanager
    async def _translate_errors(self, action: str) -> AsyncIterator[None]:
        try:
            yield
        except IntegrityError as exc:
            await self._session.rollback()
            if is_unique_violation(exc):
                detail = str(exc.orig)
                logger.warning("Unique violation while trying to %s: %s", action, detail)
                raise AccountAlreadyExistsError(detail) from exc
            logger.error("Integrity error while trying to %s: %s", action, exc)
            raise StoreFailureError(f"{action} failed: {exc.orig}") from exc
        except (SQLAlchemyError, OSError) as exc:
            logger.error("Store failure while trying to %s: %s", action, exc)
            raise StoreFailureError(f"{action} failed: {exc}") from exc

    async def create(self, payload: AccountCreateInput, password_hash: str) -> Account:
        model = UserModel(
            username=payload.username,
            email=payload.email,
            password_hash=password_hash,
            role=AccountRole(payload.role).value,
            is_active=True,
        )
        async with self._translate_errors("create account"):
            self._session.add(model)
            await self._session.flush()
            await self._session.refresh(model)
        logger.info("Created account %s (%s)", model.id, model.role)
        return self._to_domain(model)

    async def get_by_id(self, account_id: int) -> Account:
        model = await self._fetch_one(UserModel.id == account_id, "load account")
        if model is None:
            raise AccountNotFoundError(account_id)
        return self._to_domain(model)

    async def get_by_email(self, email: str) -> Account:
        model = await self._fetch_one(UserModel.email == email, "load account")
        if model is None:
            raise AccountNotFoundError(email)
        return self._to_domain(model)

    async def get_by_username(self, username: str) -> Account:
        model = await self._fetch_one(UserModel.username == username, "load account")
        if model is None:
            raise AccountNotFoundError(username)
        return self._to_domain(model)

    async def list_accounts(self, limit: int, offset: int) -> list[Account]:
        validate_page(limit, offset)
        if limit == 0:
            return []
        stmt = (
            select(UserModel)
            .where(UserModel.is_active.is_(True))
            .order_by(UserModel.created_at.desc(), UserModel.id.desc())
            .limit(limit)
            .offset(offset)
        )
        async with self._translate_errors("list accounts"):
            result = await self._session.execute(stmt)
            models = result.scalars().all()
        return [self._to_domain(model) for model in models]

    async def update(self, account_id: int, payload: AccountUpdateInput) -> Account:
        # Read, merge, write: a concurrent update of the same row may be lost.
        model = await self._fetch_one(UserModel.id == account_id, "load account")
        if model is None:
            raise AccountNotFoundError(account_id)

        for name, value in payload.changes().items():
            if name == "role":
                value = AccountRole(value).value
            setattr(model, name, value)
        model.updated_at = func.now()

        async with self._translate_errors("update account"):
            await self._session.flush()
            await self._session.refresh(model)
        return self._to_domain(model)

    async def deactivate(self, account_id: int) -> Account:
        model = await self._fetch_one(UserModel.id == account_id, "load account")
        if model is None:
            raise AccountNotFoundError(account_id)

        if not model.is_active:
            return self._to_domain(model)

        # updated_at is refreshed by the column's onupdate.
        model.is_active = False
        async with self._translate_errors("deactivate account"):
            await self._session.flush()
            await self._session.refresh(model)
        logger.info("Deactivated account %s", account_id)
        return self._to_domain(model)

    async def _fetch_one(self, criterion: Any, action: str) -> UserModel | None:
        stmt = select(UserModel).where(criterion)
        async with self._translate_errors(action):
            result = await self._session.execute(stmt)
            return result.scalar_one_or_none()

    @staticmethod
    def _to_domain(model: UserModel) -> Account:
        return Account(
            id=int(model.id),
            username=model.username,
            email=model.email,
            password_hash=model.password_hash,
            role=AccountRole(model.role or AccountRole.USER.value),
            is_active=bool(model.is_active),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
