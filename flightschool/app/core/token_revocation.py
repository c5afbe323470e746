"""
Token Revocation System using Redis.

Implements token blacklisting to immediately invalidate JWT tokens
when users are deactivated or log out.
"""

import logging
from flightschool.app.core import redis_client as redis_client_module
from flightschool.app.core.config import settings

logger = logging.getLogger("flightschool.auth")

# Redis key prefix for blacklisted tokens
TOKEN_BLACKLIST_PREFIX = "blacklist:token:"
USER_TOKENS_PREFIX = "user:tokens:"


async def revoke_token(token: str, user_id: str) -> bool:
    """
    Revoke a specific JWT token by adding it to the blacklist.

    Args:
        token: The JWT token string to revoke
        user_id: User ID who owns the token

    Returns:
        True if successfully revoked, False otherwise
    """
    try:
        # Tokens auto-expire anyway, so the blacklist entry only needs to outlive them
        ttl_seconds = settings.access_token_expire_minutes * 60
        key = f"{TOKEN_BLACKLIST_PREFIX}{token}"
        await redis_client_module.redis_client.set(key, str(user_id), ex=ttl_seconds)
        return True
    except Exception:
        logger.exception("Error revoking token for user %s", user_id)
        return False


async def is_token_revoked(token: str) -> bool:
    """
    Check if a token has been revoked.

    Redis being unavailable is treated as "not revoked".
    """
    try:
        key = f"{TOKEN_BLACKLIST_PREFIX}{token}"
        exists = await redis_client_module.redis_client.exists(key)
        return exists > 0
    except Exception:
        logger.warning("Token revocation check failed; allowing request", exc_info=True)
        return False


async def revoke_all_user_tokens(user_id: str) -> bool:
    """
    Revoke all active tokens for a specific user.

    Args:
        user_id: User ID whose tokens should be revoked

    Returns:
        True if successful
    """
    try:
        key = f"{USER_TOKENS_PREFIX}{user_id}:revoked"
        ttl_seconds = settings.access_token_expire_minutes * 60
        await redis_client_module.redis_client.set(key, "1", ex=ttl_seconds)
        return True
    except Exception:
        logger.exception("Error revoking all tokens for user %s", user_id)
        return False


async def are_user_tokens_revoked(user_id: str) -> bool:
    """Check if all tokens for a user have been revoked."""
    try:
        key = f"{USER_TOKENS_PREFIX}{user_id}:revoked"
        exists = await redis_client_module.redis_client.exists(key)
        return exists > 0
    except Exception:
        logger.warning("User token revocation check failed for %s", user_id, exc_info=True)
        return False
