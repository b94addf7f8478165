"""Database infrastructure helpers (engine, sessions, migrations)."""

from .base import Base
from .models import UserModel
from .session import Database, build_engine

__all__ = ["Base", "UserModel", "Database", "build_engine"]
