"""Translate account errors into HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from lumastack.modules.accounts import (
    AccountAlreadyExistsError,
    AccountConflictError,
    AccountError,
    AccountNotFoundError,
    AccountValidationError,
    StoreFailureError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS: dict[type[AccountError], int] = {
    AccountValidationError: status.HTTP_400_BAD_REQUEST,
    AccountNotFoundError: status.HTTP_404_NOT_FOUND,
    AccountAlreadyExistsError: status.HTTP_409_CONFLICT,
    AccountConflictError: status.HTTP_409_CONFLICT,
    StoreFailureError: status.HTTP_503_SERVICE_UNAVAILABLE,
}

STORE_UNAVAILABLE = "store unavailable"


def status_for(exc: AccountError) -> int:
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def account_error_handler(request: Request, exc: AccountError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    if isinstance(exc, AccountAlreadyExistsError):
        detail = "account already exists"
    elif isinstance(exc, StoreFailureError):
        # Driver messages carry SQL text and parameters; they stay in the log.
        detail = STORE_UNAVAILABLE
    else:
        detail = exc.message
    return JSONResponse(status_code=status_code, content={"detail": detail})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AccountError, account_error_handler)


__all__ = ["ERROR_STATUS", "STORE_UNAVAILABLE", "status_for", "account_error_handler", "register_exception_handlers"]
