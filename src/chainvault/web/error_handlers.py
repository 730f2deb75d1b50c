import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from chainvault.errors import (
    AccessDeniedError,
    AuthenticationError,
    InvalidTokenError,
    NotFoundError,
    UpstreamStorageError,
    UserError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# First matching class wins; subclasses inherit their parent's status
USER_ERROR_STATUS: list[tuple[type[UserError], int, str]] = [
    (AuthenticationError, 401, "authentication_error"),
    (InvalidTokenError, 403, "invalid_token"),
    (AccessDeniedError, 403, "access_denied"),
    (NotFoundError, 404, "not_found"),
    (ValidationError, 400, "validation_error"),
    (UpstreamStorageError, 500, "upstream_storage_error"),
]
DEFAULT_USER_ERROR_STATUS = (400, "bad_request")


def error_response(status_code: int, message: str, error_type: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, "type": error_type})


def status_for(exc: UserError) -> tuple[int, str]:
    """HTTP status and machine-readable type for a user-facing error."""
    for error_class, status_code, error_type in USER_ERROR_STATUS:
        if isinstance(exc, error_class):
            return status_code, error_type
    return DEFAULT_USER_ERROR_STATUS


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Render any UserError; its message is safe to show the client."""
    if not isinstance(exc, UserError):
        return await general_exception_handler(_, exc)
    status_code, error_type = status_for(exc)
    return error_response(status_code, str(exc), error_type)


async def request_validation_error_handler(_: Request, exc: Exception) -> Response:
    """Report malformed request bodies as 400 with the first failing field."""
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg', 'invalid value')}" if location else str(first.get("msg", "Invalid request"))
    else:
        message = "Invalid request"
    return error_response(400, message, "validation_error")


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    logger.exception("Unexpected error: %s", exc)
    return error_response(500, "An unexpected error occurred.", "internal_server_error")
