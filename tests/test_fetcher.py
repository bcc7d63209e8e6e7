"""Tests for paged table reads."""

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from orderflow.config.constants import SCAN_PAGE_SIZE
from orderflow.models.order import OrderStatus
from orderflow.services.fetcher import PaginatedFetcher
from orderflow.services.normalizer import normalize_order
from orderflow.stores.base import ScanPage

from conftest import MemoryStore, ScriptedStore, make_order

pytestmark = pytest.mark.asyncio


def three_pages():
    return [
        ScanPage(items=[make_order("1"), make_order("2")], next_page_token="1", count=2),
        ScanPage(items=[make_order("3")], next_page_token="2", count=1),
        ScanPage(
            items=[make_order("4"), make_order("5"), {"id": "6", "Item": {}}],
            next_page_token=None,
            count=3,
        ),
    ]


async def test_fetch_all_accumulates_every_page():
    store = ScriptedStore(three_pages())
    fetcher = PaginatedFetcher(store, normalize_order)

    result = await fetcher.fetch_all()

    assert len(result.records) == 6
    assert result.total_count == 6
    assert [order.id for order in result.records] == ["1", "2", "3", "4", "5", "6"]
    assert [call["page_token"] for call in store.scan_calls] == [None, "1", "2"]


async def test_fetch_all_uses_fixed_page_size():
    store = MemoryStore([make_order(str(i)) for i in range(1, 251)])
    fetcher = PaginatedFetcher(store, normalize_order)

    result = await fetcher.fetch_all()

    assert result.total_count == 250
    assert len(store.scan_calls) == 3
    assert all(call["limit"] == SCAN_PAGE_SIZE for call in store.scan_calls)


async def test_fetch_all_empty_table():
    fetcher = PaginatedFetcher(MemoryStore(), normalize_order)

    result = await fetcher.fetch_all()

    assert result.records == []
    assert result.total_count == 0


async def test_fetch_all_propagates_backend_error():
    pages = three_pages()
    pages[1] = RedisConnectionError("connection reset")
    store = ScriptedStore(pages)
    fetcher = PaginatedFetcher(store, normalize_order)

    with pytest.raises(RedisConnectionError, match="connection reset"):
        await fetcher.fetch_all()

    # No retry
    assert len(store.scan_calls) == 2


async def test_fetch_batch_issues_one_scan():
    store = ScriptedStore(three_pages())
    fetcher = PaginatedFetcher(store, normalize_order)

    batch = await fetcher.fetch_batch(None)

    assert len(store.scan_calls) == 1
    assert [order.id for order in batch.records] == ["1", "2"]
    assert batch.next_page_token == "1"
    assert batch.has_more is True
    assert batch.total_count == 2


async def test_fetch_batch_resumes_from_token():
    store = ScriptedStore(three_pages())
    fetcher = PaginatedFetcher(store, normalize_order)

    batch = await fetcher.fetch_batch("2")

    assert store.scan_calls == [{"page_token": "2", "limit": SCAN_PAGE_SIZE}]
    assert len(batch.records) == 3
    assert batch.next_page_token is None
    assert batch.has_more is False


async def test_fetch_batch_normalizes_records():
    store = ScriptedStore(
        [ScanPage(items=[{"id": "9", "Item": {"financial_status": "voided"}}], count=1)]
    )
    fetcher = PaginatedFetcher(store, normalize_order)

    batch = await fetcher.fetch_batch()

    order = batch.records[0]
    assert order.id == "9"
    assert order.financial_status == "voided"
    assert order.status == OrderStatus.PENDING
