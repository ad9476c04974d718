"""
Redis caching service for the comic roster.

CACHING STRATEGY
================

What we cache:
  - The full comic roster (ordered by name, JSON-serialized)
  - Cache key: "comics:roster"

Why:
  - The roster is read on every event page (assignment dropdown), the
    comics page and the API listing, while it changes only when a comic is
    created, edited or deleted

Invalidation strategy:
  - On comic create/update/delete: delete the roster key
  - TTL-based expiry as safety net (REDIS_CACHE_TTL)

Redis is optional. When it is disabled or unreachable every call falls
through to the store.
"""

import json
from typing import Optional

import redis.asyncio as redis

from cammcomedy.core.config import get_settings
from cammcomedy.core.logging import get_logger
from cammcomedy.core.metrics import record_cache_operation, redis_connection_errors

logger = get_logger(__name__)
settings = get_settings()

ROSTER_KEY = "comics:roster"

_redis_client: Optional[redis.Redis] = None


async def get_redis() -> Optional[redis.Redis]:
    """Get or create Redis connection. Returns None if Redis is disabled."""
    global _redis_client

    if not settings.REDIS_ENABLED:
        return None

    if _redis_client is None:
        try:
            _redis_client = redis.from_url(
                settings.REDIS_URL,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
                retry_on_timeout=True,
            )
            await _redis_client.ping()
            logger.info("redis_connected", url=settings.REDIS_URL)
        except Exception as e:
            redis_connection_errors.inc()
            logger.error("redis_connection_failed", error=str(e))
            _redis_client = None
            return None

    return _redis_client


async def close_redis() -> None:
    """Close Redis connection on shutdown."""
    global _redis_client
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None


async def get_cached_roster() -> Optional[list[dict]]:
    """Retrieve the cached comic roster."""
    client = await get_redis()
    if not client:
        return None

    try:
        data = await client.get(ROSTER_KEY)
        record_cache_operation("get", hit=bool(data))
        if data:
            logger.debug("cache_hit", key=ROSTER_KEY)
            return json.loads(data)
        logger.debug("cache_miss", key=ROSTER_KEY)
    except Exception as e:
        logger.error("cache_get_error", key=ROSTER_KEY, error=str(e))

    return None


async def set_cached_roster(data: list[dict]) -> None:
    """Cache the comic roster with TTL."""
    client = await get_redis()
    if not client:
        return

    try:
        await client.setex(ROSTER_KEY, settings.REDIS_CACHE_TTL, json.dumps(data, default=str))
        logger.debug("cache_set", key=ROSTER_KEY, ttl=settings.REDIS_CACHE_TTL)
    except Exception as e:
        logger.error("cache_set_error", key=ROSTER_KEY, error=str(e))


async def invalidate_roster_cache() -> None:
    client = await get_redis()
    if not client:
        return

    try:
        deleted = await client.delete(ROSTER_KEY)
        logger.info("cache_invalidated", key=ROSTER_KEY, keys_deleted=deleted)
    except Exception as e:
        logger.error("cache_invalidation_error", error=str(e))


async def get_cache_stats() -> dict:
    """Get Redis cache statistics for monitoring."""
    client = await get_redis()
    if not client:
        return {"status": "disabled"}

    try:
        info = await client.info("stats")
        hits = info.get("keyspace_hits", 0)
        misses = info.get("keyspace_misses", 0)
        return {
            "status": "connected",
            "hits": hits,
            "misses": misses,
            "hit_rate": round(hits / max(hits + misses, 1) * 100, 2),
        }
    except Exception as e:
        return {"status": "error", "error": str(e)}
