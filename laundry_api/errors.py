# laundry_api/errors.py
"""
Error kinds raised by the stores, the access guard and the handlers.

Each kind carries the HTTP status and the public message it is rendered
with; ``register_exception_handlers`` turns them into ``{"message": ...}``
JSON bodies.
"""
import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"
    headers: Optional[Dict[str, str]] = None

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"message": self.message}


class InvalidInput(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid input"

    def __init__(self, message: Optional[str] = None, fields: Optional[List[str]] = None):
        super().__init__(message)
        self.fields = fields or []

    def to_dict(self) -> dict:
        payload = super().to_dict()
        if self.fields:
            payload["fields"] = self.fields
        return payload


class AlreadyExists(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "User already exists"


class InvalidCredentials(AppError):
    # Same error for an unknown username and a wrong password
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid username or password"


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Not authenticated"
    headers = {"WWW-Authenticate": "Bearer"}


class NoTokenProvided(Unauthenticated):
    message = "No token provided"


class InvalidToken(Unauthenticated):
    message = "Invalid token"


class NotFound(AppError):
    # Covers bookings owned by someone else as well
    status_code = status.HTTP_404_NOT_FOUND
    message = "Booking not found or not authorized"


class InternalError(AppError):
    pass


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # ("body", "username") names a field; ("body",) or ("body", 12) do not
    fields = sorted({
        err["loc"][-1] for err in exc.errors()
        if len(err.get("loc", ())) > 1 and isinstance(err["loc"][-1], str)
    })
    logger.debug("Rejected malformed request to %s: %s", request.url.path, fields)
    return await app_error_handler(request, InvalidInput("Invalid request body", fields=fields))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return await app_error_handler(request, InternalError())


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error rendering. Call before adding CORS so its headers reach error responses too."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Starlette renders plain Exception handlers outside every user middleware,
    # so the last-resort conversion runs as a middleware of its own
    @app.middleware("http")
    async def catch_unhandled_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return await unhandled_error_handler(request, exc)
