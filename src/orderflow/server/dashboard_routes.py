"""
Dashboard API Routes

Order listing endpoints for the dashboard: the full filtered/sorted/paged
view and incremental batches for infinite scroll.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from orderflow.config.constants import DASHBOARD_PAGE_SIZE, SORT_ASC
from orderflow.core.exceptions import OrderFlowError
from orderflow.core.logger import setup_logger
from orderflow.server.dependencies import get_order_service
from orderflow.services.order_service import (
    OrderService,
    filter_orders,
    paginate,
    sort_orders,
)

logger = setup_logger(__name__)

# Router with /api/orders prefix
router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("")
async def get_orders(
    status: str = Query(default="all", description="all, paid, pending or failed"),
    search: str = Query(default="", description="Case-insensitive text search"),
    sort: str = Query(default=SORT_ASC, description="asc (oldest first) or desc"),
    page: int = Query(default=1, ge=1, description="Dashboard page, 1-based"),
    per_page: int = Query(default=DASHBOARD_PAGE_SIZE, ge=1, le=500),
    refresh: bool = Query(default=False, description="Bypass the cached listing"),
    service: OrderService = Depends(get_order_service),
) -> Dict[str, Any]:
    """
    Get one dashboard page of orders.

    Reads every order (cached for a few minutes unless ``refresh`` is set),
    then filters by status and search text, sorts by creation time and
    slices out the requested page.
    """
    try:
        if refresh:
            result = await service.refresh_orders()
        else:
            result = await service.get_orders()
    except OrderFlowError:
        raise
    except Exception as e:
        logger.error(f"Error fetching orders: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Failed to fetch orders"})

    filtered = filter_orders(result.records, status=status, search=search)
    ordered = sort_orders(filtered, order=sort)
    page_data = paginate(ordered, page=page, per_page=per_page)

    return {
        **page_data,
        "filtered_count": len(filtered),
        "totalCount": result.total_count,
    }


@router.get("/batch")
async def get_orders_batch(
    token: Optional[str] = Query(default=None, description="Token from the previous batch"),
    service: OrderService = Depends(get_order_service),
) -> Dict[str, Any]:
    """
    Get a single batch of orders for incremental loading.

    The caller appends batches and passes ``nextPageToken`` back to get the
    next one; ``hasMore`` is false once the table is exhausted.
    """
    try:
        batch = await service.get_orders_batch(token)
    except OrderFlowError:
        raise
    except Exception as e:
        logger.error(f"Error fetching orders batch: {e}", exc_info=True)
        return JSONResponse(
            status_code=500, content={"error": "Failed to fetch orders batch"}
        )

    return {
        "orders": batch.records,
        "nextPageToken": batch.next_page_token,
        "hasMore": batch.has_more,
        "totalCount": batch.total_count,
    }
