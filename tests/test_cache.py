"""Tests for the expiring caches."""

import json
from unittest.mock import AsyncMock

import pytest

from orderflow.core.cache import MemoryCache, RedisCache

pytestmark = pytest.mark.asyncio


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


async def test_memory_cache_returns_fresh_value():
    cache = MemoryCache(clock=FakeClock())

    await cache.put("orders", [{"id": "1"}], ttl_seconds=60)

    assert await cache.get("orders") == [{"id": "1"}]


async def test_memory_cache_expires():
    clock = FakeClock()
    cache = MemoryCache(clock=clock)
    await cache.put("orders", [1, 2], ttl_seconds=60)

    clock.now = 59.9
    assert await cache.get("orders") == [1, 2]

    clock.now = 60.0
    assert await cache.get("orders") is None
    assert "orders" not in cache._entries


async def test_memory_cache_missing_and_invalidate():
    cache = MemoryCache(clock=FakeClock())

    assert await cache.get("nope") is None

    await cache.put("orders", "x", ttl_seconds=10)
    await cache.invalidate("orders")
    await cache.invalidate("orders")

    assert await cache.get("orders") is None


async def test_redis_cache_uses_key_ttl():
    client = AsyncMock()
    cache = RedisCache(client, namespace="test")

    await cache.put("orders", [{"id": "1"}], ttl_seconds=300)

    client.set.assert_awaited_once_with("test:orders", json.dumps([{"id": "1"}]), ex=300)


async def test_redis_cache_get_decodes_or_returns_none():
    client = AsyncMock()
    client.get.side_effect = [json.dumps({"a": 1}), None]
    cache = RedisCache(client, namespace="test")

    assert await cache.get("orders") == {"a": 1}
    assert await cache.get("orders") is None


async def test_redis_cache_invalidate():
    client = AsyncMock()
    cache = RedisCache(client, namespace="test")

    await cache.invalidate("orders")

    client.delete.assert_awaited_once_with("test:orders")
