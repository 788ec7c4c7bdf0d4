"""Authentication-related Pydantic schemas."""

from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from greenworld.core.security import PASSWORD_MAX_BYTES, password_fits_bcrypt
from greenworld.db.enums import Role
from greenworld.schemas.common import CamelModel


class UserSession(CamelModel):
    """
    Identity resolved from a bearer token.

    Returned by the get_current_user dependency and used for every
    authorization decision.
    """
    id: int
    email: str
    name: str
    role: Role
    organization_name: str | None = None


class UserRead(UserSession):
    """User as listed by admins."""
    created_at: datetime | None = None


class RegisterRequest(CamelModel):
    """POST /auth/register body."""
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=2, max_length=255)
    role: Role
    organization_name: str | None = Field(None, max_length=255)

    @field_validator("password")
    @classmethod
    def password_within_bcrypt_limit(cls, value: str) -> str:
        if not password_fits_bcrypt(value):
            raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
        return value


class LoginRequest(CamelModel):
    """POST /auth/login body."""
    email: EmailStr
    password: str = Field(..., min_length=1)


class ProfileUpdate(CamelModel):
    """PUT /auth/profile body. Omitted fields are left unchanged."""
    name: str | None = Field(None, min_length=2, max_length=255)
    organization_name: str | None = Field(None, max_length=255)


class AuthResponse(CamelModel):
    """Register/login response."""
    message: str
    user: UserSession
    token: str


class MeResponse(CamelModel):
    """Response schema for GET /auth/me and PUT /auth/profile."""
    user: UserSession


class UserListResponse(CamelModel):
    users: list[UserRead]
