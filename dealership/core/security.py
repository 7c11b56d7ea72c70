import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Request
from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError, JWTError
from passlib.context import CryptContext
from pydantic import BaseModel, ValidationError as PydanticValidationError

from dealership.core.config import settings
from dealership.core.exceptions import (
    InternalError,
    MalformedTokenError,
    TokenExpiredError,
    TokenVerificationError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

BEARER_PREFIX = "Bearer "


class TokenClaims(BaseModel):
    """Identity carried by a session token."""
    userId: int
    email: str
    rol: str


def hash_password(password: str) -> str:
    """One-way salted bcrypt hash."""
    try:
        return pwd_context.hash(password)
    except (ValueError, TypeError) as e:
        logger.error(f"Error hashing password: {e}")
        raise InternalError("Error processing password")


def verify_password(password: str, hashed: str) -> bool:
    """Compare a password with a stored hash; malformed hashes never match."""
    try:
        return pwd_context.verify(password, hashed)
    except (ValueError, TypeError) as e:
        logger.error(f"Error comparing password: {e}")
        return False


def create_access_token(claims: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Sign ``claims`` into a JWT that expires after the configured lifetime."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = dict(claims)
    to_encode["exp"] = datetime.now(timezone.utc) + expires_delta
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> TokenClaims:
    """
    Verify the signature and expiry of ``token`` and return its claims.

    Raises:
        TokenExpiredError: the token is past its expiry.
        MalformedTokenError: bad signature or structure.
        TokenVerificationError: the token decoded but its claims are unusable.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM]
        )
    except ExpiredSignatureError:
        raise TokenExpiredError()
    except JWTClaimsError:
        raise TokenVerificationError()
    except JWTError:
        raise MalformedTokenError()

    try:
        return TokenClaims(**payload)
    except PydanticValidationError:
        raise TokenVerificationError("Token is missing identity claims")


def extract_token_from_header(header: Optional[str]) -> Optional[str]:
    """Return the token of a ``Bearer <token>`` header, or None for anything else."""
    if not header or not header.startswith(BEARER_PREFIX):
        return None
    token = header[len(BEARER_PREFIX):].strip()
    return token or None


def get_current_user(request: Request) -> TokenClaims:
    """Dependency returning the identity the access gate attached to the request."""
    user = getattr(request.state, "user", None)
    if user is None:
        raise UnauthorizedError("Authentication required")
    return user


def get_optional_user(request: Request) -> Optional[TokenClaims]:
    """
    Dependency for public routes that behave differently for staff.

    Uses the gate's identity when present, otherwise tries the Authorization
    header; an invalid or missing token yields None instead of an error.
    """
    user = getattr(request.state, "user", None)
    if user is not None:
        return user
    token = extract_token_from_header(request.headers.get("Authorization"))
    if token is None:
        return None
    try:
        return verify_token(token)
    except UnauthorizedError:
        return None
