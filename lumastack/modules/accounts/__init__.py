"""Account domain services and models."""

from .exceptions import (
    AccountError,
    AccountValidationError,
    AccountNotFoundError,
    AccountAlreadyExistsError,
    AccountConflictError,
    StoreFailureError,
)
from .models import (
    Account,
    AccountCreateInput,
    AccountPatch,
    AccountRole,
    AccountUpdateInput,
    AccountView,
    UNSET,
    to_view,
)
from .repository import AccountRepository
from .service import AccountService
from .bootstrap import CredentialPrompter, create_admin

__all__ = [
    "Account",
    "AccountCreateInput",
    "AccountPatch",
    "AccountRole",
    "AccountUpdateInput",
    "AccountView",
    "CredentialPrompter",
    "AccountRepository",
    "AccountService",
    "AccountError",
    "AccountValidationError",
    "AccountNotFoundError",
    "AccountAlreadyExistsError",
    "AccountConflictError",
    "StoreFailureError",
    "UNSET",
    "create_admin",
    "to_view",
]
