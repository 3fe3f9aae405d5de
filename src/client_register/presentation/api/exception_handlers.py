"""Translation of domain and credential errors into HTTP responses.

Every error body has the same shape::

    {"detail": "<message>", "code": "<ErrorCode>"}

Request validation failures add an ``errors`` list naming the offending
fields. Submitted values are never echoed back, since they may hold a
password.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from client_register.domain.shared.exceptions import (
    ConflictError,
    DomainException,
    ErrorCode,
)
from register_auth import (
    AuthError,
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
)

logger = logging.getLogger(__name__)

BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_EMAIL: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_PASSWORD_FORMAT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_PHONE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.EMAIL_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _status_for(exc: DomainException) -> int:
    if exc.code in ERROR_CODE_TO_STATUS:
        return ERROR_CODE_TO_STATUS[exc.code]
    if isinstance(exc, ConflictError):
        return status.HTTP_409_CONFLICT
    return status.HTTP_400_BAD_REQUEST


def _classify_auth_error(exc: AuthError) -> tuple[ErrorCode, dict[str, str] | None] | None:
    """Return the code and headers for a client-side auth failure.

    None means the error is a server misconfiguration, not the client's.
    """
    if isinstance(exc, TokenExpiredError):
        return ErrorCode.TOKEN_EXPIRED, BEARER_CHALLENGE
    if isinstance(exc, InvalidTokenError):
        return ErrorCode.TOKEN_INVALID, BEARER_CHALLENGE
    if isinstance(exc, InvalidCredentialsError):
        return ErrorCode.INVALID_CREDENTIALS, None
    return None


def _error_response(
    status_code: int,
    message: str,
    code: ErrorCode,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": message, "code": code.value},
        headers=headers,
    )


def _validation_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Keep location, message and type of each error; drop input and ctx."""
    return [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": _printable(str(error.get("msg", ""))),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]


def _printable(text: str) -> str:
    # Lone surrogates cannot be encoded into the UTF-8 response body
    return text.encode("utf-8", "backslashreplace").decode("utf-8")


def _internal_error() -> JSONResponse:
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An internal error occurred",
        ErrorCode.INTERNAL_ERROR,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the validation, domain, auth and catch-all handlers on ``app``."""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        errors = _validation_errors(exc)
        logger.warning(
            "%s %s rejected: invalid request data (fields=%s)",
            request.method,
            request.url.path,
            [".".join(error["loc"]) for error in errors],
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "detail": "Invalid request data",
                "code": ErrorCode.VALIDATION_ERROR.value,
                "errors": errors,
            },
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        # Client errors: warning, not error
        logger.warning(
            "%s %s rejected: %s (code=%s, details=%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.code.value,
            exc.details,
        )
        return _error_response(_status_for(exc), exc.message, exc.code)

    @app.exception_handler(AuthError)
    async def auth_exception_handler(
        request: Request,
        exc: AuthError,
    ) -> JSONResponse:
        """Expired and invalid tokens get distinct codes.

        A client seeing TOKEN_EXPIRED can log in again; TOKEN_INVALID
        means the token must be discarded.
        """
        classified = _classify_auth_error(exc)
        if classified is None:
            logger.error(
                "Credential configuration error on %s %s: %s",
                request.method,
                request.url.path,
                exc.message,
            )
            return _internal_error()

        code, headers = classified
        logger.warning(
            "Authentication failed on %s %s (code=%s)",
            request.method,
            request.url.path,
            code.value,
        )
        return _error_response(
            status.HTTP_401_UNAUTHORIZED,
            exc.message,
            code,
            headers=headers,
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _internal_error()
