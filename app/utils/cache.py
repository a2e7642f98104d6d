"""
Redis cache utility for leaderboard caching
"""
import redis
import json
import logging
from typing import Optional, Any
from app.config import settings

logger = logging.getLogger(__name__)

LEADERBOARD_PREFIX = "leaderboard"


class CacheService:
    """
    Redis-based caching service

    Every operation degrades to a no-op when Redis is unreachable or no URL
    is configured, so callers never need to handle cache failures.
    """

    def __init__(self, redis_url: str, default_ttl: int = 300):
        self.default_ttl = default_ttl
        self.redis_client = None

        if not redis_url:
            logger.info("No REDIS_URL configured. Caching disabled.")
            return

        try:
            self.redis_client = redis.from_url(
                redis_url,
                decode_responses=True,
                socket_connect_timeout=5
            )
            # Test connection
            self.redis_client.ping()
            logger.info("Redis connection established")
        except Exception as e:
            logger.warning(f"Redis connection failed: {str(e)}. Caching disabled.")
            self.redis_client = None

    def leaderboard_key(self, limit: int) -> str:
        """Cache key for a leaderboard of the given size"""
        return f"{LEADERBOARD_PREFIX}:{limit}"

    def get(self, key: str) -> Optional[Any]:
        """
        Get value from cache

        Args:
            key: Cache key

        Returns:
            Cached value or None
        """
        if not self.redis_client:
            return None

        try:
            value = self.redis_client.get(key)
            if value:
                logger.debug(f"Cache hit: {key}")
                return json.loads(value)
            logger.debug(f"Cache miss: {key}")
            return None
        except Exception as e:
            logger.error(f"Cache get error: {str(e)}")
            return None

    def set(self, key: str, value: Any, ttl: int = None) -> bool:
        """
        Set value in cache

        Args:
            key: Cache key
            value: Value to cache (must be JSON serializable)
            ttl: Time to live in seconds (default from constructor)

        Returns:
            Success status
        """
        if not self.redis_client:
            return False

        try:
            ttl = ttl or self.default_ttl
            serialized = json.dumps(value)
            self.redis_client.setex(key, ttl, serialized)
            logger.debug(f"Cache set: {key} (TTL: {ttl}s)")
            return True
        except Exception as e:
            logger.error(f"Cache set error: {str(e)}")
            return False

    def clear_leaderboard_cache(self) -> bool:
        """Drop every cached leaderboard after attempts change"""
        if not self.redis_client:
            return False

        try:
            keys = self.redis_client.keys(f"{LEADERBOARD_PREFIX}:*")
            if keys:
                self.redis_client.delete(*keys)
                logger.info(f"Cleared {len(keys)} leaderboard cache entries")
            return True
        except Exception as e:
            logger.error(f"Cache clear error: {str(e)}")
            return False


# Global instance
cache_service = CacheService(settings.REDIS_URL, default_ttl=settings.LEADERBOARD_CACHE_TTL)
