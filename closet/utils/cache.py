"""
Caching utilities for the Closet backend.
Provides Redis-based caching with an in-memory TTL cache fallback.
"""
import json
import logging
from typing import Optional, Dict, Any
from cachetools import TTLCache
import redis

from closet.config import settings

logger = logging.getLogger(__name__)


# In-memory caches (fallback when Redis is unavailable)
_in_memory_caches: Dict[str, TTLCache] = {}

# Redis client (initialized lazily)
_redis_client: Optional[Any] = None
_redis_failed = False


def get_redis_client():
    """Get or create Redis client. Returns None when REDIS_URL is unset or unreachable."""
    global _redis_client, _redis_failed
    if not settings.REDIS_URL or _redis_failed:
        return None

    if _redis_client is None:
        try:
            logger.info(f"Attempting Redis connection via REDIS_URL: {settings.REDIS_URL[:50]}...")
            client = redis.from_url(
                settings.REDIS_URL,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
                retry_on_timeout=True,
                health_check_interval=30
            )
            client.ping()
            _redis_client = client
            logger.info("Redis connected via REDIS_URL")
        except redis.RedisError as e:
            logger.warning(f"Redis connection failed: {e}. Using in-memory cache only.")
            _redis_failed = True
            _redis_client = None

    return _redis_client


def get_in_memory_cache(cache_name: str, maxsize: int = 100, ttl: int = 300) -> TTLCache:
    """Get or create an in-memory TTL cache."""
    if cache_name not in _in_memory_caches:
        _in_memory_caches[cache_name] = TTLCache(maxsize=maxsize, ttl=ttl)
    return _in_memory_caches[cache_name]


def cache_get(key: str, cache_name: str = "default") -> Optional[Any]:
    """Get value from cache (Redis or in-memory)."""
    redis_client = get_redis_client()
    if redis_client:
        try:
            cached = redis_client.get(key)
            if cached:
                logger.debug(f"Redis cache HIT for key: {key}")
                return json.loads(cached)
            logger.debug(f"Redis cache MISS for key: {key}")
            return None
        except redis.RedisError as e:
            logger.warning(f"Redis get failed for key {key}: {e}")

    return get_in_memory_cache(cache_name).get(key)


def cache_set(key: str, value: Any, ttl: int = 300, cache_name: str = "default") -> bool:
    """Set value in cache (Redis or in-memory). Values must be JSON serializable."""
    payload = json.dumps(value, default=str)
    redis_client = get_redis_client()
    if redis_client:
        try:
            redis_client.setex(key, ttl, payload)
            logger.debug(f"Redis cache SET for key: {key} (TTL: {ttl}s)")
            return True
        except redis.RedisError as e:
            logger.warning(f"Redis set failed for key {key}: {e}")

    # Round-trip through JSON so both backends hand back the same shapes
    get_in_memory_cache(cache_name, ttl=ttl)[key] = json.loads(payload)
    return True


def cache_clear_pattern(pattern: str) -> int:
    """Clear all cache keys matching a pattern."""
    deleted = 0

    redis_client = get_redis_client()
    if redis_client:
        try:
            keys = redis_client.keys(pattern)
            if keys:
                deleted = redis_client.delete(*keys)
        except redis.RedisError as e:
            logger.warning(f"Redis pattern delete failed for {pattern}: {e}")

    needle = pattern.replace('*', '')
    for cache in _in_memory_caches.values():
        for key in [k for k in list(cache.keys()) if needle in str(k)]:
            cache.pop(key, None)
            deleted += 1

    return deleted


# Feed cache

def _feed_key(limit: int) -> str:
    return f"feed:first_page:{limit}"


def get_cached_feed_page(limit: int) -> Optional[Dict]:
    """Get the cached first page of the public feed."""
    get_in_memory_cache("feed", ttl=settings.FEED_CACHE_TTL)
    return cache_get(_feed_key(limit), cache_name="feed")


def set_cached_feed_page(limit: int, page: Dict) -> bool:
    """Cache the first page of the public feed."""
    get_in_memory_cache("feed", ttl=settings.FEED_CACHE_TTL)
    return cache_set(_feed_key(limit), page, ttl=settings.FEED_CACHE_TTL, cache_name="feed")


def invalidate_feed() -> int:
    """Drop cached feed pages after posts or the outfits they show change."""
    return cache_clear_pattern("feed:*")


def clear_all_caches():
    """Clear all caches (useful for testing or cache invalidation)."""
    redis_client = get_redis_client()
    if redis_client:
        try:
            redis_client.flushdb()
        except redis.RedisError as e:
            logger.warning(f"Redis flush failed: {e}")

    for cache in _in_memory_caches.values():
        cache.clear()

    logger.info("All caches cleared")
