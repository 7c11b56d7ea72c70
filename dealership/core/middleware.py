from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from typing import Callable, FrozenSet, Optional, Tuple
import logging

from dealership.core.config import settings
from dealership.core.exceptions import UnauthorizedError
from dealership.core.security import extract_token_from_header, verify_token

logger = logging.getLogger(__name__)


def _gated(prefix: str, *methods: str) -> Tuple[str, FrozenSet[str]]:
    return f"{settings.API_PREFIX}{prefix}", frozenset(methods)


# Path prefixes and the methods on them that need a valid bearer token.
# Everything else (listing vehicles, submitting an inquiry, login) is public.
PROTECTED_ROUTES: Tuple[Tuple[str, FrozenSet[str]], ...] = (
    _gated("/vehiculos", "POST", "PUT", "PATCH", "DELETE"),
    _gated("/consultas", "GET", "PUT", "PATCH", "DELETE"),
    _gated("/upload", "POST"),
    _gated("/dashboard", "GET"),
    _gated("/auth/me", "GET"),
)


def _matches(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix.rstrip("/") + "/")


def requires_auth(path: str, method: str) -> bool:
    """Whether a request to ``path`` with ``method`` must carry a token."""
    method = method.upper()
    for prefix, methods in PROTECTED_ROUTES:
        if _matches(path, prefix):
            return method in methods
    return False


def _unauthorized(message: str) -> Response:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"success": False, "error": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


class AccessGateMiddleware(BaseHTTPMiddleware):
    """
    Middleware enforcing bearer authentication on protected routes.

    Requests outside ``PROTECTED_ROUTES`` pass through untouched. Gated
    requests either get their verified claims on ``request.state.user`` or are
    answered with 401 before reaching the handler. Roles are not checked.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        method = request.method

        if not requires_auth(path, method):
            return await call_next(request)

        token = extract_token_from_header(request.headers.get("Authorization"))
        if token is None:
            return _unauthorized("Unauthorized. Token required.")

        try:
            claims = verify_token(token)
        except UnauthorizedError as e:
            logger.warning(f"Rejected token on {method} {path}: {e.message}")
            return _unauthorized(e.message)

        request.state.user = claims
        logger.info(f"Authenticated {claims.email} ({claims.rol}) for {method} {path}")
        return await call_next(request)


def add_middleware(app: FastAPI) -> None:
    """Add all middleware to the FastAPI application."""
    app.add_middleware(AccessGateMiddleware)
