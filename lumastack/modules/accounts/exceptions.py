"""Account domain specific exceptions."""


class AccountError(Exception):
    """Base class for account domain errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class AccountValidationError(AccountError):
    """Raised when input is rejected before touching the store."""


class AccountNotFoundError(AccountError):
    """Raised when the requested account cannot be found."""

    def __init__(self, key: object = None) -> None:
        super().__init__("account not found" if key is None else f"account not found: {key}")
        self.key = key


class AccountAlreadyExistsError(AccountError):
    """Raised when the store reports a duplicate username or email."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"account already exists: {detail}")
        self.detail = detail


class AccountConflictError(AccountError):
    """Raised when a pre-check finds an account that blocks the operation."""


class StoreFailureError(AccountError):
    """Raised for any backing-store error not classified above."""
