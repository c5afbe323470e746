"""
Redis client initialization.

Redis backs the token revocation lists consulted on every authenticated request.
"""

import redis.asyncio as redis
from flightschool.app.core.config import settings


# Create async Redis client
redis_client = redis.from_url(
    settings.redis_url,
    decode_responses=settings.redis_decode_responses,
)
