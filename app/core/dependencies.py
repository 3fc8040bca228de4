"""
FastAPI dependencies for the application.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import settings
from app.db.session import get_db  # noqa: F401  re-exported for routers
from app.errors import Unauthorized
from app.schemas.user import UserInfo
from app.services.auth_service import AuthService

# Security scheme for JWT bearer tokens; missing headers are handled below
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> UserInfo:
    """
    Get the authenticated caller from the bearer token.

    The token's signature and expiry are verified; identity comes from
    its claims, so no database round trip is needed.

    Raises:
        401: If the token is missing or invalid
    """
    if credentials is None:
        raise Unauthorized("Authentication required")

    user = AuthService.identify(credentials.credentials)
    if user is None:
        raise Unauthorized()
    return user


async def get_task_owner(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[int]:
    """
    Resolve the owner id that scopes task queries.

    With AUTH_ENABLED a valid token is required. Without it, a valid token
    still scopes to its user and anonymous callers see every task.
    """
    if credentials is None:
        if settings.AUTH_ENABLED:
            raise Unauthorized("Authentication required")
        return None

    user = AuthService.identify(credentials.credentials)
    if user is None:
        raise Unauthorized()
    return user.id
