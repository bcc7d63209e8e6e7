"""Stores module - Key-value table backends."""

from orderflow.stores.base import KeyValueStore, ScanPage
from orderflow.stores.redis_store import RedisStore, create_redis_client

__all__ = ["KeyValueStore", "ScanPage", "RedisStore", "create_redis_client"]
