"""
Authentication dependencies for FastAPI.

This module provides dependencies for protecting routes with JWT authentication.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from flightschool.app.core.exceptions import AuthenticationError, TokenRevokedError
from flightschool.app.core.jwt import decode_access_token
from flightschool.app.core.token_revocation import is_token_revoked, are_user_tokens_revoked
from flightschool.app.db.session import get_db
from flightschool.app.models.user import User
from flightschool.app.schemas.auth import CurrentUser

# HTTP Bearer security scheme; a missing header is reported as 401 below
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> CurrentUser:
    """
    FastAPI dependency for JWT authentication.

    Security checks:
    1. A bearer credential is present
    2. JWT signature, expiry, issuer and audience are valid
    3. Neither the token nor all of the user's tokens have been revoked
    4. The user still exists and is active; roles are read from the database

    Args:
        credentials: HTTP Bearer token from request header
        db: Database session for real-time user lookup

    Returns:
        The verified requester with their current role set

    Raises:
        AuthenticationError / TokenRevokedError: 401 if authentication fails
    """
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    token = credentials.credentials

    # 1. Decode and validate JWT
    payload = decode_access_token(token)
    if payload is None:
        raise AuthenticationError("Could not validate credentials")

    user_id = payload.get("user_id") or payload.get("sub")
    if not user_id:
        raise AuthenticationError("Invalid token payload")

    # 2. Revocation checks
    if await is_token_revoked(token):
        raise TokenRevokedError()

    if await are_user_tokens_revoked(user_id):
        raise TokenRevokedError("User access has been revoked")

    # 3. Real-time database check
    result = await db.execute(select(User).where(User.id == str(user_id)))
    user = result.scalar_one_or_none()

    if not user:
        raise AuthenticationError("User not found")

    if not user.is_active:
        raise AuthenticationError("User account is inactive")

    return CurrentUser(user_id=user.id, email=user.email, roles=user.role_names)
