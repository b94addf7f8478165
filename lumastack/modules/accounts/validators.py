"""Input rules shared by the bootstrap flow and the account service."""

from __future__ import annotations

from .exceptions import AccountValidationError

MIN_USERNAME_LENGTH = 3
# Column widths of users.username and users.email.
MAX_USERNAME_LENGTH = 50
MAX_EMAIL_LENGTH = 255
MIN_PASSWORD_LENGTH = 8
# bcrypt only looks at the first 72 bytes and newer releases reject longer input.
MAX_PASSWORD_BYTES = 72


def validate_email(email: str) -> str:
    if "@" not in email:
        raise AccountValidationError("email must contain '@'")
    if len(email) > MAX_EMAIL_LENGTH:
        raise AccountValidationError("email too long")
    return email


def validate_username(username: str) -> str:
    if len(username) < MIN_USERNAME_LENGTH:
        raise AccountValidationError("username too short")
    if len(username) > MAX_USERNAME_LENGTH:
        raise AccountValidationError("username too long")
    return username


def validate_password(password: str, confirmation: str | None = None) -> str:
    if confirmation is not None and password != confirmation:
        raise AccountValidationError("secrets do not match")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise AccountValidationError("secret too short")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise AccountValidationError("secret too long")
    return password


def validate_page(limit: int, offset: int) -> None:
    if limit < 0 or offset < 0:
        raise AccountValidationError("limit and offset must be non-negative")


__all__ = [
    "MIN_USERNAME_LENGTH",
    "MAX_USERNAME_LENGTH",
    "MAX_EMAIL_LENGTH",
    "MIN_PASSWORD_LENGTH",
    "MAX_PASSWORD_BYTES",
    "validate_email",
    "validate_username",
    "validate_password",
    "validate_page",
]
