"""
User and authentication Pydantic schemas.
"""

from datetime import datetime

from pydantic import EmailStr

from app.schemas.base import CamelModel


class RegisterRequest(CamelModel):
    """Schema for registering a new account."""

    name: str = ""
    email: EmailStr
    password: str = ""


class LoginRequest(CamelModel):
    """Schema for login request."""

    email: EmailStr
    password: str = ""


class UserInfo(CamelModel):
    """Public view of a user, also used for the /auth/me payload."""

    id: int
    name: str
    email: str


class AuthResponse(CamelModel):
    """Schema for login/register response."""

    token: str
    expires: datetime
    user: UserInfo
