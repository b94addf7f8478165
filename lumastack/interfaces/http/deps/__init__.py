"""Reusable FastAPI dependencies."""

from .database import commit_session, get_container, get_db_session
from .account import get_account_repository, get_account_service, get_password_hasher

__all__ = [
    "commit_session",
    "get_container",
    "get_db_session",
    "get_account_repository",
    "get_account_service",
    "get_password_hasher",
]
