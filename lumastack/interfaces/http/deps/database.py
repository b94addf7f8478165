"""Database related dependency providers."""

import logging
from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lumastack.core.container import ApplicationContainer
from lumastack.modules.accounts import StoreFailureError

logger = logging.getLogger(__name__)


def get_container(request: Request) -> ApplicationContainer:
    return request.app.state.container


async def get_db_session(
    container: ApplicationContainer = Depends(get_container),
) -> AsyncIterator[AsyncSession]:
    async with container.database.session() as session:
        yield session


async def commit_session(db: AsyncSession) -> None:
    """Commit before the response is built so a failed write is reported."""
    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Commit failed: %s", exc)
        raise StoreFailureError(f"commit failed: {exc}") from exc


__all__ = ["get_container", "get_db_session", "commit_session"]
