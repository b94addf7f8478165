"""SQLAlchemy-backed repository implementations."""

from .account_repository import SqlAccountRepository, is_unique_violation
from .account_store import AccountStore

__all__ = [
    "AccountStore",
    "SqlAccountRepository",
    "is_unique_violation",
]
