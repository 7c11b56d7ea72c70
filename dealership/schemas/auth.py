from typing import Optional
from pydantic import BaseModel, Field

from dealership.core.enums import UserRole

class LoginRequest(BaseModel):
    """Credentials posted to the login endpoint."""
    email: Optional[str] = None
    password: Optional[str] = None


class UserRead(BaseModel):
    """User data returned to the client (never includes the password hash)."""
    id: int
    email: str
    name: str = Field(..., alias="nombre")
    role: UserRole = Field(..., alias="rol")
    is_active: bool = Field(..., alias="activo")

    model_config = {"from_attributes": True, "populate_by_name": True}


class LoginResponse(BaseModel):
    success: bool = True
    message: str
    token: str
    user: UserRead = Field(..., alias="usuario")

    model_config = {"populate_by_name": True}


class CurrentUserResponse(BaseModel):
    success: bool = True
    user_id: int = Field(..., alias="userId")
    email: str
    role: str = Field(..., alias="rol")

    model_config = {"populate_by_name": True}
