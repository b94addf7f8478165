"""Account related dependency providers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lumastack.core.container import ApplicationContainer
from lumastack.core.crypto import PasswordHasher
from lumastack.infrastructure.database.repositories import SqlAccountRepository
from lumastack.modules.accounts import AccountService

from .database import get_container, get_db_session


def get_password_hasher(container: ApplicationContainer = Depends(get_container)) -> PasswordHasher:
    return container.hasher


def get_account_repository(db: AsyncSession = Depends(get_db_session)) -> SqlAccountRepository:
    return SqlAccountRepository(db)


def get_account_service(
    repository: SqlAccountRepository = Depends(get_account_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> AccountService:
    return AccountService(repository, hasher)


__all__ = [
    "get_password_hasher",
    "get_account_repository",
    "get_account_service",
]
