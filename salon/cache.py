"""
Time-bounded cache for business settings
Owned by the application (app.state), never a process-wide singleton
"""
import json
import logging
import time
from typing import Any, Optional

import redis

logger = logging.getLogger(__name__)


class SettingsCache:
    """TTL cache with get/set/invalidate, optionally backed by Redis"""

    def __init__(self, ttl: int = 300, redis_client: Optional[redis.Redis] = None, prefix: str = "settings"):
        self.ttl = ttl
        self.prefix = prefix
        self.redis_client = redis_client
        # Format: {key: (expires_at, value)}
        self._entries: dict[str, tuple[float, Any]] = {}

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{key}"

    def get(self, key: str) -> Optional[Any]:
        """Get value from cache, None when missing or expired"""
        if self.redis_client is not None:
            try:
                value = self.redis_client.get(self._key(key))
                if value:
                    logger.debug(f"✅ Cache HIT: {key}")
                    return json.loads(value)
                logger.debug(f"❌ Cache MISS: {key}")
                return None
            except redis.RedisError as e:
                logger.error(f"❌ Cache get error for {key}: {e}")
                return None

        entry = self._entries.get(key)
        if entry is None:
            logger.debug(f"❌ Cache MISS: {key}")
            return None

        expires_at, value = entry
        if time.monotonic() >= expires_at:
            self._entries.pop(key, None)
            logger.debug(f"⌛ Cache EXPIRED: {key}")
            return None

        logger.debug(f"✅ Cache HIT: {key}")
        return value

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """Set value in cache with TTL (defaults to the cache lifetime)"""
        ttl = self.ttl if ttl is None else ttl

        if self.redis_client is not None:
            try:
                self.redis_client.setex(self._key(key), ttl, json.dumps(value))
                logger.debug(f"✅ Cache SET: {key} (TTL: {ttl}s)")
                return True
            except redis.RedisError as e:
                logger.error(f"❌ Cache set error for {key}: {e}")
                return False

        self._entries[key] = (time.monotonic() + ttl, value)
        logger.debug(f"✅ Cache SET: {key} (TTL: {ttl}s)")
        return True

    def invalidate(self, key: Optional[str] = None) -> None:
        """Drop one key, or every entry when no key is given"""
        if self.redis_client is not None:
            try:
                if key is not None:
                    self.redis_client.delete(self._key(key))
                else:
                    keys = self.redis_client.keys(self._key("*"))
                    if keys:
                        self.redis_client.delete(*keys)
            except redis.RedisError as e:
                logger.error(f"❌ Cache invalidate error for {key or '*'}: {e}")
            return

        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)
        logger.debug(f"✅ Cache INVALIDATE: {key or '*'}")


def build_settings_cache(ttl: int, redis_url: Optional[str] = None) -> SettingsCache:
    """Create the application's settings cache, using Redis when configured"""
    if not redis_url:
        return SettingsCache(ttl=ttl)

    try:
        client = redis.from_url(
            redis_url,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True,
        )
        client.ping()
        logger.info("Redis connected successfully for settings cache")
        return SettingsCache(ttl=ttl, redis_client=client)
    except redis.RedisError as e:
        logger.warning(f"⚠️ Redis cache unavailable, using in-process cache: {e}")
        return SettingsCache(ttl=ttl)
