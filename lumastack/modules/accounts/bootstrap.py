"""First administrator bootstrap.

The flow is a straight pipeline: each stage either passes or raises and
aborts everything after it. Values not supplied by the caller are asked for
through a ``CredentialPrompter`` at the stage that needs them, so an invalid
or already registered email is rejected before anything else is requested.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from lumastack.core.crypto import PasswordHasher

from .exceptions import AccountConflictError, AccountNotFoundError, AccountValidationError
from .models import AccountCreateInput, AccountRole, AccountView, to_view
from .repository import AccountRepository
from .validators import validate_email, validate_password, validate_username

logger = logging.getLogger(__name__)


class CredentialPrompter(Protocol):
    """Source of values the caller did not pass in."""

    def ask_email(self) -> str:
        ...

    def ask_username(self) -> str:
        ...

    def ask_password(self) -> tuple[str, str]:
        """Return the password and its confirmation."""
        ...


def _missing(field: str) -> AccountValidationError:
    return AccountValidationError(f"{field} is required")


async def create_admin(
    repository: AccountRepository,
    hasher: PasswordHasher,
    *,
    email: Optional[str] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
    prompter: Optional[CredentialPrompter] = None,
) -> AccountView:
    """Create an administrator account and return its public view.

    Raises ``AccountValidationError`` for malformed or missing input,
    ``AccountConflictError`` when the email is already registered (active or
    not), and lets ``AccountAlreadyExistsError``/``StoreFailureError`` from the
    store propagate unchanged.
    """
    if email is None:
        if prompter is None:
            raise _missing("email")
        email = prompter.ask_email()
    validate_email(email)

    try:
        await repository.get_by_email(email)
    except AccountNotFoundError:
        pass
    else:
        raise AccountConflictError("account already exists for this email")

    if username is None:
        if prompter is None:
            raise _missing("username")
        username = prompter.ask_username()
    validate_username(username)

    confirmation = None
    if password is None:
        if prompter is None:
            raise _missing("password")
        password, confirmation = prompter.ask_password()
    validate_password(password, confirmation)

    password_hash = hasher.hash(password)
    account = await repository.create(
        AccountCreateInput(
            username=username,
            email=email,
            password=password,
            role=AccountRole.ADMIN,
        ),
        password_hash,
    )
    logger.info("Administrator account %s created", account.id)
    return to_view(account)


__all__ = ["CredentialPrompter", "create_admin"]
