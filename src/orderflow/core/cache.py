"""Expiring key/value cache for fetched listings.

The order dashboard keeps the last full listing for a few minutes so a page
reload does not rescan the whole table. The cache is injected into the
services that want it; the fetcher and normalizer never see it.
"""

import json
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Tuple

import redis.asyncio as redis

from orderflow.core.logger import setup_logger

logger = setup_logger(__name__)


class Cache(ABC):
    """Abstract expiring cache.

    Values must be JSON-serializable so every backend can hold them.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None if missing or expired."""
        pass

    @abstractmethod
    async def put(self, key: str, value: Any, ttl_seconds: int) -> None:
        """Store a value that expires after ``ttl_seconds``."""
        pass

    @abstractmethod
    async def invalidate(self, key: str) -> None:
        """Drop a cached value if present."""
        pass


class MemoryCache(Cache):
    """Process-local cache with monotonic-clock expiry."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """Initialize cache.

        Args:
            clock: Time source in seconds (injectable for tests)
        """
        self.clock = clock
        self._entries: Dict[str, Tuple[Any, float]] = {}

    async def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if self.clock() >= expires_at:
            logger.debug(f"Cache entry expired: {key}")
            del self._entries[key]
            return None

        return value

    async def put(self, key: str, value: Any, ttl_seconds: int) -> None:
        self._entries[key] = (value, self.clock() + ttl_seconds)

    async def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)


class RedisCache(Cache):
    """Cache stored in Redis, expiry delegated to key TTLs."""

    def __init__(self, client: redis.Redis, namespace: str = "orderflow:cache"):
        """Initialize cache.

        Args:
            client: Async Redis client (shared with the record store)
            namespace: Prefix for cache keys
        """
        self.client = client
        self.namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    async def get(self, key: str) -> Optional[Any]:
        raw = await self.client.get(self._key(key))
        if raw is None:
            return None
        return json.loads(raw)

    async def put(self, key: str, value: Any, ttl_seconds: int) -> None:
        await self.client.set(
            self._key(key), json.dumps(value, default=str), ex=ttl_seconds
        )

    async def invalidate(self, key: str) -> None:
        await self.client.delete(self._key(key))
