"""
Error taxonomy shared by services and the HTTP layer.

Services raise these exceptions; the handlers registered by
``register_exception_handlers`` turn them into the ``{success: false, ...}``
envelope with the matching status code.
"""

import logging
from typing import List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from dealership.core.config import settings

logger = logging.getLogger(__name__)

# foreign_key_violation, unique_violation
CONFLICT_PGCODES = ("23503", "23505")


class DealershipError(Exception):
    """Base class for errors that map onto an HTTP status."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(DealershipError):
    """Input rejected before any mutation; carries every field message."""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: List[str]):
        if isinstance(errors, str):
            errors = [errors]
        super().__init__(errors[0] if errors else "Invalid input")
        self.errors = list(errors)


class UnauthorizedError(DealershipError):
    status_code = status.HTTP_401_UNAUTHORIZED


class TokenExpiredError(UnauthorizedError):
    def __init__(self, message: str = "Token expired"):
        super().__init__(message)


class MalformedTokenError(UnauthorizedError):
    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class TokenVerificationError(UnauthorizedError):
    def __init__(self, message: str = "Could not verify token"):
        super().__init__(message)


class ForbiddenError(DealershipError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(DealershipError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(DealershipError):
    status_code = status.HTTP_409_CONFLICT


class InternalError(DealershipError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ImageHostError(InternalError):
    """The external image host rejected or failed a request."""


def error_body(exc: DealershipError) -> dict:
    if isinstance(exc, ValidationError):
        return {"success": False, "error": exc.message, "errors": exc.errors}
    return {"success": False, "error": exc.message}


def _format_request_error(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    if location:
        return f"{location}: {error.get('msg')}"
    return error.get("msg", "Invalid request")


async def dealership_error_handler(request: Request, exc: DealershipError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(status_code=exc.status_code, content=error_body(exc), headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = [_format_request_error(error) for error in exc.errors()]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": messages[0] if messages else "Invalid request", "errors": messages},
    )


def is_conflict(exc: IntegrityError) -> bool:
    """True for foreign key and unique violations (psycopg2 codes or SQLite messages)."""
    if getattr(exc.orig, "pgcode", None) in CONFLICT_PGCODES:
        return True
    message = str(exc.orig).upper()
    return "FOREIGN KEY" in message or "UNIQUE" in message


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    if is_conflict(exc):
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"success": False, "error": "Operation conflicts with related records"},
        )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": "Invalid data"},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    message = str(exc) if settings.is_development else "Internal server error"
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error envelope handlers to the application."""
    app.add_exception_handler(DealershipError, dealership_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
