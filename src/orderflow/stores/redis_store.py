"""Redis implementation of the key-value table.

Each record is a JSON string stored under ``<table>:<id>``. A table scan is
a Redis ``SCAN`` over that key pattern; the Redis cursor is handed out as the
continuation token and cursor ``0`` marks the end of the iteration.

One page may take several ``SCAN`` calls. Keys repeated within a page are
dropped. Redis only guarantees that every key present for the whole iteration
is returned at least once, so a key can still show up in two different pages.
"""

import json
from typing import Any, Dict, List, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from orderflow.config.constants import SCAN_PAGE_SIZE
from orderflow.config.settings import settings
from orderflow.core.exceptions import ConfigurationError, ValidationError
from orderflow.core.logger import setup_logger
from orderflow.stores.base import KeyValueStore, ScanPage

logger = setup_logger(__name__)


def create_redis_client(
    host: Optional[str] = None,
    port: Optional[int] = None,
    db: Optional[int] = None,
    password: Optional[str] = None,
) -> redis.Redis:
    """Create an async Redis client from settings.

    Raises:
        ConfigurationError: If no Redis host is configured
    """
    host = host or settings.redis_host
    if not host:
        raise ConfigurationError(
            "Redis host is not configured (set REDIS_HOST in the environment)"
        )

    pool = redis.ConnectionPool(
        host=host,
        port=port or settings.redis_port,
        db=db if db is not None else settings.redis_db,
        password=password or settings.redis_password,
        decode_responses=True,
        max_connections=10,
        socket_timeout=5.0,
        socket_connect_timeout=5.0,
    )
    logger.info(f"Redis client initialized: {host}:{port or settings.redis_port}")
    return redis.Redis(connection_pool=pool)


class RedisStore(KeyValueStore):
    """Key-value table stored in Redis."""

    def __init__(self, client: redis.Redis, table: Optional[str]):
        """Initialize Redis store.

        Args:
            client: Async Redis client (decode_responses=True)
            table: Table name, used as key prefix

        Raises:
            ConfigurationError: If the table name is empty
        """
        if not table:
            raise ConfigurationError(
                "Table name is not configured (set ORDERS_TABLE / PRODUCTS_TABLE "
                "in the environment)"
            )

        self.client = client
        self.table = table
        self.pattern = f"{table}:*"

    def _key(self, record_id: str) -> str:
        return f"{self.table}:{record_id}"

    def _decode(self, key: str, value: str) -> Optional[Dict[str, Any]]:
        try:
            record = json.loads(value)
        except json.JSONDecodeError:
            logger.warning(f"Skipping undecodable record at {key}")
            return None

        if not isinstance(record, dict):
            logger.warning(f"Skipping non-object record at {key}")
            return None

        record.setdefault("id", key[len(self.table) + 1:])
        return record

    async def scan(
        self, page_token: Optional[str] = None, limit: Optional[int] = None
    ) -> ScanPage:
        """Read one page of records, starting at ``page_token``.

        ``COUNT`` is only a hint to Redis and is applied before ``MATCH``, so
        a single ``SCAN`` call may return few or no keys of this table. Calls
        are repeated until ``limit`` keys are collected or the iteration ends.
        A page holds at least ``limit`` records unless it is the last one, and
        may overshoot by the size of the final ``SCAN`` reply.
        """
        if page_token and not page_token.isdigit():
            raise ValidationError(f"Invalid page token '{page_token}'")
        limit = limit or SCAN_PAGE_SIZE
        cursor = int(page_token) if page_token else 0

        keys: List[str] = []
        seen = set()
        calls = 0
        while True:
            cursor, batch = await self.client.scan(
                cursor=cursor, match=self.pattern, count=limit
            )
            cursor = int(cursor)
            calls += 1
            for key in batch:
                if key not in seen:
                    seen.add(key)
                    keys.append(key)
            if cursor == 0 or len(keys) >= limit:
                break

        items: List[Dict[str, Any]] = []
        if keys:
            values = await self.client.mget(keys)
            for key, value in zip(keys, values):
                # Key deleted between SCAN and MGET
                if value is None:
                    continue
                record = self._decode(key, value)
                if record is not None:
                    items.append(record)

        next_page_token = str(cursor) if cursor != 0 else None

        logger.debug(
            f"Scanned {len(items)} records from {self.table} "
            f"in {calls} SCAN calls (next cursor {cursor})"
        )

        return ScanPage(items=items, next_page_token=next_page_token, count=len(items))


    async def get(self, record_id: str) -> Optional[Dict[str, Any]]:
        key = self._key(record_id)
        value = await self.client.get(key)
        if value is None:
            return None
        return self._decode(key, value)

    async def put(self, record: Dict[str, Any]) -> Dict[str, Any]:
        record_id = record.get("id")
        if not record_id:
            raise ValueError("Record must have an id")

        await self.client.set(self._key(str(record_id)), json.dumps(record, default=str))
        return record

    async def delete(self, record_id: str) -> None:
        await self.client.delete(self._key(record_id))

    async def health_check(self) -> bool:
        try:
            return bool(await self.client.ping())
        except RedisError as e:
            logger.error(f"Redis health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.client.aclose()
