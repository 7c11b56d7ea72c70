import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dealership.core.exceptions import ForbiddenError, UnauthorizedError, ValidationError
from dealership.core.security import TokenClaims, create_access_token, get_current_user, verify_password
from dealership.db.session import get_db
from dealership.models import User
from dealership.schemas.auth import CurrentUserResponse, LoginRequest, LoginResponse

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/login", response_model=LoginResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)) -> LoginResponse:
    """
    Exchange email and password for a bearer token.

    Returns 400 when a field is missing, 401 for unknown users or wrong
    passwords and 403 for deactivated accounts.
    """
    if not credentials.email or not credentials.email.strip() or not credentials.password:
        raise ValidationError(["Email and password are required"])

    email = credentials.email.strip().lower()
    user = db.query(User).filter(User.email == email).first()

    if user is None:
        logger.warning(f"Login attempt for unknown user {email}")
        raise UnauthorizedError("Invalid credentials")

    if not user.is_active:
        logger.warning(f"Login attempt for deactivated user {email}")
        raise ForbiddenError("User is deactivated. Contact an administrator.")

    if not verify_password(credentials.password, user.password_hash):
        logger.warning(f"Failed login attempt for {email}")
        raise UnauthorizedError("Invalid credentials")

    token = create_access_token({
        "userId": user.id,
        "email": user.email,
        "rol": user.role.value,
    })

    logger.info(f"Successful login: {user.email}")
    return {
        "success": True,
        "message": "Login successful",
        "token": token,
        "usuario": user,
    }

@router.post("/logout")
def logout():
    """
    Tokens are stateless, so logging out only means the client drops its token.
    """
    logger.info("User logged out")
    return {"success": True, "message": "Session closed"}

@router.get("/me", response_model=CurrentUserResponse)
def get_user_info(current_user: TokenClaims = Depends(get_current_user)):
    """Return the identity carried by the caller's token."""
    return {
        "success": True,
        "userId": current_user.userId,
        "email": current_user.email,
        "rol": current_user.rol,
    }
