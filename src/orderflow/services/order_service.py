"""Order service for listing, filtering and paging dashboard orders."""

import math
from datetime import datetime
from typing import Any, Dict, List, Optional

from orderflow.config.constants import (
    DASHBOARD_PAGE_SIZE,
    ORDER_CACHE_KEY,
    SORT_ASC,
    SORT_DESC,
    STATUS_FILTER_OPTIONS,
)
from orderflow.config.settings import settings
from orderflow.core.cache import Cache
from orderflow.core.exceptions import ValidationError
from orderflow.core.logger import setup_logger
from orderflow.models.order import Order
from orderflow.services.fetcher import BatchResult, FetchResult, PaginatedFetcher
from orderflow.services.normalizer import normalize_order
from orderflow.stores.base import KeyValueStore

logger = setup_logger(__name__)


def _search_fields(order: Order) -> List[str]:
    billing = order.billing_address
    return [
        order.order_id,
        billing.first_name,
        billing.last_name,
        order.customerEmail,
        billing.phone,
        order.status.value,
        billing.city,
        billing.country,
    ]


def filter_orders(
    orders: List[Order], status: str = "all", search: str = ""
) -> List[Order]:
    """
    Apply the dashboard's status filter, then its text search.

    Args:
        orders: Normalized orders
        status: "all" or one of the display statuses
        search: Case-insensitive substring; blank matches everything

    Returns:
        Matching orders in their original order

    Raises:
        ValidationError: If status is not a known filter value
    """
    if status not in STATUS_FILTER_OPTIONS:
        raise ValidationError(
            f"Unknown status filter '{status}' (expected one of {', '.join(STATUS_FILTER_OPTIONS)})"
        )

    if status != "all":
        orders = [order for order in orders if order.status.value == status]

    needle = (search or "").strip().lower()
    if not needle:
        return list(orders)

    return [
        order
        for order in orders
        if any(needle in (value or "").lower() for value in _search_fields(order))
    ]


def _created_timestamp(order: Order) -> float:
    try:
        return datetime.fromisoformat(order.createdAt.replace("Z", "+00:00")).timestamp()
    except ValueError:
        # Unparseable timestamps sort first
        return float("-inf")


def sort_orders(orders: List[Order], order: str = SORT_ASC) -> List[Order]:
    """Sort orders by creation time, oldest first for "asc"."""
    if order not in (SORT_ASC, SORT_DESC):
        raise ValidationError(f"Unknown sort order '{order}' (expected asc or desc)")

    return sorted(orders, key=_created_timestamp, reverse=order == SORT_DESC)


def paginate(
    orders: List[Order], page: int = 1, per_page: int = DASHBOARD_PAGE_SIZE
) -> Dict[str, Any]:
    """Slice one dashboard page out of an already filtered and sorted list."""
    if page < 1:
        raise ValidationError("Page numbers start at 1")

    total_pages = math.ceil(len(orders) / per_page)
    start = (page - 1) * per_page

    return {
        "orders": orders[start:start + per_page],
        "page": page,
        "per_page": per_page,
        "total_pages": total_pages,
        "start_index": start,
        "end_index": min(start + per_page, len(orders)),
    }


class OrderService:
    """Reads orders from the store, with an optional cache for full listings."""

    def __init__(
        self,
        store: KeyValueStore,
        cache: Optional[Cache] = None,
        cache_ttl_seconds: Optional[int] = None,
    ):
        """Initialize service.

        Args:
            store: Orders table
            cache: Cache for the full listing (None disables caching)
            cache_ttl_seconds: Listing lifetime (default from settings)
        """
        self.fetcher: PaginatedFetcher[Order] = PaginatedFetcher(store, normalize_order)
        self.cache = cache
        self.cache_ttl_seconds = cache_ttl_seconds or settings.order_cache_ttl_seconds

    async def get_orders(self, use_cache: bool = True) -> FetchResult[Order]:
        """
        Get every order, served from the cache while it is fresh.

        Args:
            use_cache: False to force a full rescan

        Returns:
            FetchResult with all normalized orders
        """
        if use_cache and self.cache is not None:
            cached = await self.cache.get(ORDER_CACHE_KEY)
            if cached is not None:
                orders = [Order.model_validate(item) for item in cached]
                logger.info(f"Serving {len(orders)} orders from cache")
                return FetchResult(records=orders, total_count=len(orders))

        result = await self.fetcher.fetch_all()

        if self.cache is not None:
            await self.cache.put(
                ORDER_CACHE_KEY,
                [order.model_dump(mode="json") for order in result.records],
                self.cache_ttl_seconds,
            )

        return result

    async def refresh_orders(self) -> FetchResult[Order]:
        """Rescan the table and replace the cached listing."""
        if self.cache is not None:
            await self.cache.invalidate(ORDER_CACHE_KEY)
        return await self.get_orders(use_cache=False)

    async def get_orders_batch(self, page_token: Optional[str] = None) -> BatchResult[Order]:
        """Get one page of orders for incremental loading. Never cached."""
        return await self.fetcher.fetch_batch(page_token)
