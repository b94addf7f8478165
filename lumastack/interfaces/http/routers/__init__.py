"""HTTP routers."""

from . import health, users

__all__ = ["health", "users"]
