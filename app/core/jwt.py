"""
JWT access token helpers.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

from jose import JWTError, jwt

from app.core.config import settings


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None,
) -> Tuple[str, datetime]:
    """
    Create a signed access token.

    Args:
        data: Claims to embed (user id goes in "sub")
        expires_delta: Lifetime override, defaults to ACCESS_TOKEN_EXPIRE_DAYS

    Returns:
        Tuple of (encoded token, expiry datetime in UTC)
    """
    now = datetime.now(timezone.utc)
    expires = now + (expires_delta or timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS))

    to_encode = dict(data)
    to_encode.update({"iat": int(now.timestamp()), "exp": int(expires.timestamp())})

    token = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return token, expires


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Verify signature and expiry of a token.

    Returns:
        Claims dict if valid, None otherwise
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
