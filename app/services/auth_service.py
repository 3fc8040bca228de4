"""
Authentication service for registration, login and token management.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.jwt import create_access_token, decode_access_token
from app.core.security import verify_password
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserInfo

logger = logging.getLogger(__name__)


def user_info_from_claims(payload: Dict[str, Any]) -> Optional[UserInfo]:
    """
    Build the caller identity from verified token claims.

    Returns None when the identity claims are missing or malformed.
    """
    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        return None
    return UserInfo(id=user_id, name=payload.get("name", ""), email=payload.get("email", ""))


class AuthService:
    """Service for authentication operations."""

    def __init__(self, db: AsyncSession):
        self.user_repository = UserRepository(db)

    async def authenticate_user(self, email: str, password: str) -> Optional[User]:
        """
        Authenticate a user by email and password.

        Args:
            email: User email, compared case-insensitively
            password: Plain text password

        Returns:
            User object if authentication successful, None otherwise
        """
        user = await self.user_repository.get_by_email(email)

        if not user or not verify_password(password, user.password_hash):
            logger.warning("Failed login attempt for email: %s", email)
            return None

        return user

    def create_auth_response(self, user: User) -> AuthResponse:
        """
        Mint a bearer token for a user.

        Claims carry the user id (``sub``), name and email.
        """
        token, expires = create_access_token(
            {
                "sub": str(user.id),
                "name": user.name,
                "email": user.email,
            }
        )
        return AuthResponse(
            token=token,
            expires=expires,
            user=UserInfo(id=user.id, name=user.name, email=user.email),
        )

    async def login(self, credentials: LoginRequest) -> Optional[AuthResponse]:
        """
        Perform user login.

        Returns:
            AuthResponse with token and user data, or None if failed
        """
        user = await self.authenticate_user(credentials.email, credentials.password)
        if not user:
            return None

        logger.info("User %s logged in successfully", user.id)
        return self.create_auth_response(user)

    async def register(self, data: RegisterRequest) -> Optional[AuthResponse]:
        """
        Create an account and log it in.

        Returns:
            AuthResponse for the new user, or None if the email is taken
        """
        if await self.user_repository.get_by_email(data.email):
            logger.warning("Registration attempt with existing email: %s", data.email)
            return None

        user = await self.user_repository.create(data.name, data.email, data.password)
        logger.info("User %s registered successfully", user.id)
        return self.create_auth_response(user)

    @staticmethod
    def identify(token: str) -> Optional[UserInfo]:
        """Verify a bearer token and return the caller it names."""
        payload = decode_access_token(token)
        if not payload:
            return None
        return user_info_from_claims(payload)
