# backend/userapi/core/errors.py
"""Application errors and their JSON error bodies.

Every error carries a message key from the i18n catalogs; the handlers
translate it using the request's Accept-Language header and render

    {"message": ..., "timestamp": <epoch millis>, "path": ...}

with an extra "validationErrors" mapping for validation failures.
"""
import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from userapi.core.i18n import detect_language, translate
from userapi.core.logging import request_extra

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base application error."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message_key: str = "internal_error"

    def __init__(self, message_key: str | None = None):
        self.message_key = message_key or self.default_message_key
        super().__init__(self.message_key)


class ValidationFailure(AppError):
    """Request body failed validation; carries field -> message key."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message_key = "validation_failure"

    def __init__(self, validation_errors: dict[str, str]):
        super().__init__()
        self.validation_errors = validation_errors


class AuthenticationError(AppError):
    """Login credentials were rejected."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message_key = "authentication_failure"


class ForbiddenError(AppError):
    """Caller is not allowed to act on the target resource."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class InvalidTokenError(AppError):
    """Account activation token is unknown."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message_key = "account_activation_failure"


class EmailError(AppError):
    """Outgoing email could not be delivered."""

    status_code = status.HTTP_502_BAD_GATEWAY
    default_message_key = "email_failure"


class StorageUnavailableError(AppError):
    """Token storage failed; the operation may be retried."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message_key = "service_unavailable"


def error_body(
    request: Request,
    message_key: str,
    validation_errors: dict[str, str] | None = None,
) -> dict:
    """Build the localized error body for a request."""
    language = detect_language(request.headers.get("accept-language"))
    body = {
        "message": translate(message_key, language),
        "timestamp": int(time.time() * 1000),
        "path": request.url.path,
    }
    if validation_errors is not None:
        body["validationErrors"] = {
            field: translate(key, language) for field, key in validation_errors.items()
        }
    return body


def error_response(request: Request, error: AppError) -> JSONResponse:
    validation_errors = getattr(error, "validation_errors", None)
    return JSONResponse(
        status_code=error.status_code,
        content=error_body(request, error.message_key, validation_errors),
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    identity = getattr(request.state, "identity", None)
    extra = request_extra(request, identity.user_id if identity else None)
    level = logging.ERROR if exc.status_code >= 500 else logging.DEBUG
    logger.log(level, f"{type(exc).__name__}: {exc.message_key}", extra=extra)
    return error_response(request, exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies (e.g. invalid JSON) are reported like other validation failures."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(request, "validation_failure", {}),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
