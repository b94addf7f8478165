"""Domain models for accounts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class AccountRole(str, Enum):
    USER = "user"
    ADMIN = "admin"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Account:
    id: int
    username: str
    email: str
    password_hash: str = field(repr=False)
    role: AccountRole = AccountRole.USER
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_admin(self) -> bool:
        return self.role is AccountRole.ADMIN


@dataclass(frozen=True, slots=True)
class AccountView:
    """Account as shown outside the store; never carries the password hash."""

    id: int
    username: str
    email: str
    role: AccountRole
    is_active: bool
    created_at: datetime | None
    updated_at: datetime | None


def to_view(account: Account) -> AccountView:
    return AccountView(
        id=account.id,
        username=account.username,
        email=account.email,
        role=account.role,
        is_active=account.is_active,
        created_at=account.created_at,
        updated_at=account.updated_at,
    )


@dataclass(slots=True)
class AccountCreateInput:
    username: str
    email: str
    password: str
    role: AccountRole = AccountRole.USER


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


# Sentinel used to differentiate between "not provided" and an explicit value.
UNSET: object = _Unset()


@dataclass(slots=True)
class AccountUpdateInput:
    """Store-level partial update; the password is already hashed."""

    username: str | object = UNSET
    email: str | object = UNSET
    password_hash: str | object = UNSET
    role: AccountRole | object = UNSET
    is_active: bool | object = UNSET

    def changes(self) -> dict[str, object]:
        return {
            name: getattr(self, name)
            for name in ("username", "email", "password_hash", "role", "is_active")
            if getattr(self, name) is not UNSET
        }


@dataclass(slots=True)
class AccountPatch:
    """Service-level partial update carrying a plain text password."""

    username: str | object = UNSET
    email: str | object = UNSET
    password: str | object = UNSET
    role: AccountRole | object = UNSET
    is_active: bool | object = UNSET
