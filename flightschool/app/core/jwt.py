"""
JWT token utilities for authentication.

This module provides functions for encoding and decoding JWT tokens.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from flightschool.app.core.config import settings


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token.

    Args:
        data: Data payload to encode in the token (should include: user_id, email)
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string

    Example payload:
        {
            "sub": "8f2c...",
            "user_id": "8f2c...",
            "email": "pilot@example.com",
            "iss": "cruiser-aviation",
            "aud": "cruiser-app",
            "jti": "c1d2...",
            "exp": 1234567890
        }
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)

    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.access_token_expire_minutes)

    to_encode.setdefault("sub", str(data.get("user_id")))
    to_encode.update({
        "exp": expire,
        "iat": now,
        "nbf": now,
        "iss": settings.token_issuer,
        "aud": settings.token_audience,
        "jti": str(uuid.uuid4()),
    })
    encoded_jwt = jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)

    return encoded_jwt


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Decode and validate a JWT access token.

    Signature, expiry, not-before, issuer and audience are all checked.

    Args:
        token: JWT token string to decode

    Returns:
        Decoded token payload if valid, None otherwise
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
            audience=settings.token_audience,
            issuer=settings.token_issuer,
        )
        return payload
    except JWTError:
        return None
