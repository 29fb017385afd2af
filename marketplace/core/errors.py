# File: marketplace/core/errors.py

"""
Error taxonomy for the marketplace API.

Services raise these; the handlers registered in ``register_exception_handlers``
turn them into ``{"error": ...}`` JSON responses. Store failures never expose
their underlying detail to the client.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class MarketplaceError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error."

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(MarketplaceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request."


class AuthenticationError(MarketplaceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials."


class AuthorizationError(MarketplaceError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Access denied."


class NotFoundError(MarketplaceError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found."


class ConflictError(MarketplaceError):
    status_code = status.HTTP_409_CONFLICT
    message = "Conflict."


class StoreError(MarketplaceError):
    """Any failure talking to the database, including timeouts."""

    def __init__(self, detail: str | None = None):
        # detail is for server logs only; the client message stays generic
        super().__init__()
        self.detail = detail


class PasswordHashingError(MarketplaceError):
    pass


async def marketplace_error_handler(request: Request, exc: MarketplaceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %r", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    field = None
    if errors:
        loc = [str(part) for part in errors[0].get("loc", ()) if part not in ("body", "path", "query")]
        field = ".".join(loc) or None
    message = f"Invalid value for '{field}'." if field else "Malformed request body."
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": MarketplaceError.message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MarketplaceError, marketplace_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
