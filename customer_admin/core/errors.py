"""API exception taxonomy and the handlers that render it as {"message": ...} bodies."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """
    Base for errors that map to an HTTP status and a client-safe message.

    message is shown to the end user as-is, so it must never carry SQL,
    stack traces or other internal detail.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error."
    headers: dict[str, str] | None = None

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingTokenError(ApiError):
    """No bearer token on a protected request."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication token is required."
    headers = {"WWW-Authenticate": "Bearer"}


class InvalidTokenError(ApiError):
    """Token signature, structure, claims or expiry failed verification."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid or expired token."


class ForbiddenError(ApiError):
    """Token is valid but its role does not grant the operation."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You do not have permission to perform this action."


class InvalidCredentialsError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid username or password."


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Customer not found."


class ConflictError(ApiError):
    """Insert rejected because the primary key already exists."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "A customer with this id already exists."


class InsertError(ApiError):
    """Insert failed for a reason other than a duplicate id."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Failed to add customer."


class StoreError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Database error."


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message},
        headers=exc.headers,
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Collapse pydantic validation errors into a single 400 message naming the field."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        loc = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        msg = first.get("msg", "invalid value")
        message = f"Invalid request: {loc}: {msg}" if loc else f"Invalid request: {msg}"
    else:
        message = "Invalid request."
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": message},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error",
        extra={"method": request.method, "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": ApiError.default_message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
