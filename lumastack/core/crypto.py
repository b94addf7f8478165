"""Utilities for password hashing and verification."""

from __future__ import annotations

from typing import Protocol

import bcrypt

DEFAULT_ROUNDS = 12


class PasswordHasher(Protocol):
    """One-way hashing capability injected into account use cases."""

    def hash(self, password: str) -> str:
        ...

    def verify(self, password: str, hashed: str) -> bool:
        ...


class BcryptHasher:
    """Hash plain text passwords using bcrypt with a configurable work factor."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            return False


__all__ = ["PasswordHasher", "BcryptHasher", "DEFAULT_ROUNDS"]
