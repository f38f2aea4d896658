"""Optional Redis client used for rate limiting and gamification events.

Redis is not required to run a quiz: with no URL configured the pool stays
unset, ``get_redis()`` raises and ``get_redis_optional()`` returns None.
"""

import logging

import redis.asyncio as redis

logger = logging.getLogger(__name__)

_pool: redis.Redis | None = None


async def init_redis(url: str | None) -> None:
    """Create the client when a URL is configured; a missing URL leaves Redis disabled."""
    global _pool  # noqa: PLW0603
    if not url:
        logger.info("Redis disabled: no URL configured")
        return
    _pool = redis.from_url(  # type: ignore[no-untyped-call]
        url,
        encoding="utf-8",
        decode_responses=True,
        max_connections=20,
    )


async def close_redis() -> None:
    global _pool  # noqa: PLW0603
    if _pool:
        await _pool.aclose()
        _pool = None


def get_redis() -> redis.Redis:
    """Get the Redis client, or raise RuntimeError when Redis is disabled."""
    if _pool is None:
        msg = "Redis not initialized. Set CQ_REDIS_URL to enable it."
        raise RuntimeError(msg)
    return _pool


def get_redis_optional() -> redis.Redis | None:
    """Get the Redis client, or None when Redis is disabled."""
    return _pool
