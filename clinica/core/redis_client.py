"""Redis client and the cache-aside helper used for branding and sede lists."""

import json
from collections.abc import Awaitable, Callable
from typing import Any, cast

import redis
import structlog

from clinica.config import settings

logger = structlog.get_logger(__name__)

_redis_client: redis.Redis | None = None


def get_redis_client() -> redis.Redis:
    """Shared client, created on first use."""
    global _redis_client

    if _redis_client is None:
        _redis_client = redis.Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            username=settings.redis_username,
            password=settings.redis_password,
            decode_responses=settings.redis_decode_responses,
            socket_connect_timeout=5,
            socket_keepalive=True,
            health_check_interval=30,
        )

    return _redis_client


async def check_redis_connection() -> bool:
    """Ping Redis; any error counts as unhealthy."""
    try:
        get_redis_client().ping()
        return True
    except Exception:
        return False


def close_redis_connection() -> None:
    """Close the shared client."""
    global _redis_client

    if _redis_client is not None:
        _redis_client.close()
        _redis_client = None


class CacheManager:
    """
    JSON cache over Redis.

    Redis is optional for this service. Every operation is soft: a failure
    is logged and reported as a miss, so callers fall through to the
    database.
    """

    def __init__(self, redis_client: redis.Redis):
        self.redis = redis_client

    def get_json(self, key: str) -> Any | None:
        """Cached value for ``key``, or None on a miss or error."""
        try:
            value = cast(str | None, self.redis.get(key))
            return json.loads(value) if value else None
        except Exception as e:
            logger.warning("cache_read_failed", key=key, error=str(e))
            return None

    def set_json(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """
        Store ``value`` as JSON.

        Dates and datetimes are written as strings, which the response
        schemas parse back.

        Returns:
            True if stored, False otherwise
        """
        try:
            payload = json.dumps(value, default=str)
            if ttl:
                self.redis.setex(key, ttl, payload)
            else:
                self.redis.set(key, payload)
            return True
        except Exception as e:
            logger.warning("cache_write_failed", key=key, error=str(e))
            return False

    def delete(self, *keys: str) -> bool:
        """Drop one or more keys."""
        try:
            self.redis.delete(*keys)
            return True
        except Exception as e:
            logger.warning("cache_delete_failed", keys=list(keys), error=str(e))
            return False

    async def get_or_load(
        self,
        key: str,
        loader: Callable[[], Awaitable[Any]],
        ttl: int | None = None,
    ) -> Any:
        """
        Cache-aside read.

        Returns the cached value for ``key`` or awaits ``loader``, stores its
        result and returns it. ``None`` results are not cached.
        """
        cached = self.get_json(key)
        if cached is not None:
            return cached

        value = await loader()
        if value is not None:
            self.set_json(key, value, ttl=ttl)
        return value
