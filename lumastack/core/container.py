"""Explicit dependency container for wiring core services."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from lumastack.core.config import Settings
from lumastack.core.crypto import BcryptHasher, PasswordHasher
from lumastack.infrastructure.database import Database

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ApplicationContainer:
    """Long-lived collaborators shared read-only by every request.

    Built once at startup, torn down with ``shutdown()``.
    """

    settings: Settings
    database: Database
    hasher: PasswordHasher

    @classmethod
    def from_settings(cls, settings: Settings) -> "ApplicationContainer":
        return cls(
            settings=settings,
            database=Database.from_settings(settings.database),
            hasher=BcryptHasher(rounds=settings.bcrypt_rounds),
        )

    async def startup(self) -> None:
        if self.settings.database.create_tables:
            logger.info("Creating database tables")
            await self.database.create_all()

    async def shutdown(self) -> None:
        await self.database.dispose()


__all__ = ["ApplicationContainer"]
