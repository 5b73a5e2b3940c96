"""
Database Module - Redis Client

Provides the Upstash Redis client used for per-session cart snapshots.
The relational store behind products, orders and reviews is owned by the
REST backend and reached through storefront.services.api_client.
"""

from typing import Optional

from upstash_redis import Redis

from storefront.config import get_settings

# Singleton instance
_sync_redis_client: Optional[Redis] = None


def get_redis_sync() -> Redis:
    """
    Get sync Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _sync_redis_client

    if _sync_redis_client is None:
        settings = get_settings()
        if not settings.redis_url or not settings.redis_token:
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _sync_redis_client = Redis(url=settings.redis_url, token=settings.redis_token)

    return _sync_redis_client


class RedisKeys:
    """Redis key prefixes for different data types."""

    # Cart storage
    CART = "cart:"  # cart:{session_id}

    @staticmethod
    def cart_key(session_id: str) -> str:
        return f"{RedisKeys.CART}{session_id}"
