"""Turns every failure into the shop's JSON error envelope.

Envelope:
    {
        "success": false,
        "error": "Unauthorized",
        "message": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE",
        "details": {...}            # omitted in production
    }

Usage:
    from shopfront.presentation.api.exception_handlers import (
        setup_exception_handlers,
    )

    app = FastAPI()
    setup_exception_handlers(app, settings)
"""

import logging
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shopfront.domain.shared.exceptions import (
    AuthenticationError,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    PermissionDeniedError,
    RateLimitExceededError,
    ValidationError,
)
from shopfront_config.settings import Settings

logger = logging.getLogger(__name__)


ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    # 400
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_EMAIL: status.HTTP_400_BAD_REQUEST,
    ErrorCode.WEAK_PASSWORD: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_VERIFICATION_TOKEN: status.HTTP_400_BAD_REQUEST,
    # 401: no usable identity
    ErrorCode.AUTHENTICATION_REQUIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.MISSING_AUTH_HEADER: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.MALFORMED_AUTH_HEADER: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.MISSING_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_EXPIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_TOKEN_TYPE: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.AUTH_USER_NOT_FOUND: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.AUTH_USER_INACTIVE: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INCORRECT_CURRENT_PASSWORD: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_REFRESH_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.REFRESH_TOKEN_EXPIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.USER_INACTIVE: status.HTTP_401_UNAUTHORIZED,
    # 403: identity known, action refused
    ErrorCode.ACCOUNT_DEACTIVATED: status.HTTP_403_FORBIDDEN,
    ErrorCode.EMAIL_VERIFICATION_REQUIRED: status.HTTP_403_FORBIDDEN,
    ErrorCode.INSUFFICIENT_ROLE: status.HTTP_403_FORBIDDEN,
    # 404
    ErrorCode.ENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PROFILE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ADDRESS_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # 409
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.DUPLICATE_EMAIL: status.HTTP_409_CONFLICT,
    ErrorCode.EMAIL_ALREADY_VERIFIED: status.HTTP_409_CONFLICT,
    ErrorCode.DEFAULT_ADDRESS_CONFLICT: status.HTTP_409_CONFLICT,
    # 429
    ErrorCode.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
    # 500
    ErrorCode.HASHING_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _status_for(exc: DomainException) -> int:  # NOQA: PLR0911
    """Status from the code table, else from the exception's base class."""
    if exc.code in ERROR_CODE_TO_STATUS:
        return ERROR_CODE_TO_STATUS[exc.code]

    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, AuthenticationError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, PermissionDeniedError):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, EntityNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ConflictError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, RateLimitExceededError):
        return status.HTTP_429_TOO_MANY_REQUESTS

    return status.HTTP_400_BAD_REQUEST


def _status_title(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def _error_response(  # NOQA: PLR0913
    status_code: int,
    message: str,
    code: str,
    details: Any = None,
    include_details: bool = True,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    content: dict[str, Any] = {
        "success": False,
        "error": _status_title(status_code),
        "message": message,
        "code": code,
    }
    if include_details and details:
        content["details"] = details

    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer", **(headers or {})}

    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _code_for_http_status(status_code: int) -> ErrorCode:
    if status_code == status.HTTP_401_UNAUTHORIZED:
        return ErrorCode.AUTHENTICATION_REQUIRED
    if status_code == status.HTTP_403_FORBIDDEN:
        return ErrorCode.INSUFFICIENT_ROLE
    if status_code == status.HTTP_404_NOT_FOUND:
        return ErrorCode.ENTITY_NOT_FOUND
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        return ErrorCode.INTERNAL_ERROR
    return ErrorCode.VALIDATION_ERROR


def _validation_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    errors = []
    for error in exc.errors():
        # Drop the leading "body"/"query"/"path" segment
        loc = [str(part) for part in error.get("loc", ())][1:]
        errors.append(
            {
                "field": ".".join(loc) or None,
                "message": error.get("msg", "Invalid value"),
            },
        )
    return errors


def setup_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Install the handlers on ``app``.

    ``details`` and raw 500 messages are only exposed outside production.
    """
    include_details = not settings.is_production

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        status_code = _status_for(exc)

        logger.warning(
            "%s %s failed: %s [%s] %s",
            request.method,
            request.url.path,
            exc.message,
            exc.code.value,
            exc.details,
        )

        headers = None
        if isinstance(exc, RateLimitExceededError) and "retry_after" in exc.details:
            headers = {"Retry-After": str(exc.details["retry_after"])}

        return _error_response(
            status_code=status_code,
            message=exc.message,
            code=exc.code.value,
            details=exc.details,
            include_details=include_details,
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        errors = _validation_errors(exc)
        logger.info(
            "Request validation failed on %s %s: %s",
            request.method,
            request.url.path,
            [e["field"] for e in errors],
        )
        # Field errors are always returned; they only echo the request shape
        return _error_response(
            status_code=status.HTTP_400_BAD_REQUEST,
            message="Please check your input data",
            code=ErrorCode.VALIDATION_ERROR.value,
            details={"errors": errors},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
            message = f"Route {request.method} {request.url.path} not found"
        else:
            message = str(exc.detail)
        return _error_response(
            status_code=exc.status_code,
            message=message,
            code=_code_for_http_status(exc.status_code).value,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        logger.exception(
            "Unhandled error on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=str(exc) if include_details else "Something went wrong",
            code=ErrorCode.INTERNAL_ERROR.value,
        )
