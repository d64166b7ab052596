"""
Session token utilities.

Session tokens are HS256 JWTs carrying the caller's identity claims. They are
handed to the browser in an HTTP-only cookie by POST /jwt.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from app.core.config import settings


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed session token.

    Args:
        data: Identity claims to encode (at least {"email": ...})
        expires_delta: Optional lifetime (default: ACCESS_TOKEN_EXPIRE_DAYS)

    Returns:
        Encoded JWT as a string
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)

    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.ACCESS_TOKEN_SECRET, algorithm=settings.ALGORITHM)
    return encoded_jwt


def decode_token(token: str) -> dict:
    """
    Decode and validate a session token.

    Raises:
        JWTError: If the token is malformed, expired or wrongly signed
    """
    try:
        payload = jwt.decode(token, settings.ACCESS_TOKEN_SECRET, algorithms=[settings.ALGORITHM])
        return payload
    except JWTError:
        raise


def session_cookie_options() -> dict:
    """
    Cookie attributes shared by login and logout.

    Production runs cross-site behind HTTPS, so the cookie must be Secure and
    SameSite=None there; anywhere else it stays strict.
    """
    return {
        "httponly": True,
        "secure": settings.is_production,
        "samesite": "none" if settings.is_production else "strict",
    }
