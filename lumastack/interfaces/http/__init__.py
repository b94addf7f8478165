"""HTTP interface: routers, dependencies and error mapping."""

from fastapi import APIRouter

from .routers import users


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(users.router, prefix="/users", tags=["users"])
    return router


__all__ = [
    "create_api_router",
]
