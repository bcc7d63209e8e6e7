"""Service info and health routes."""

from fastapi import APIRouter

from orderflow.config.settings import settings
from orderflow.core.logger import setup_logger
from orderflow.server import dependencies

logger = setup_logger(__name__)
router = APIRouter()


@router.get("/")
async def root() -> dict:
    """Root endpoint with basic service info."""
    return {
        "service": "OrderFlow Dashboard API",
        "version": "1.0.0",
        "endpoints": {
            "orders": "GET /api/orders",
            "orders_batch": "GET /api/orders/batch",
            "products": "GET|POST /api/products",
            "product": "GET|PUT|DELETE /api/products/{product_id}",
            "health": "GET /health",
            "docs": "GET /docs",
        },
    }


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint for monitoring."""
    health_status = {
        "status": "healthy",
        "service": "orderflow",
        "checks": {},
    }

    health_status["checks"]["config"] = {
        "orders_table": "ok" if settings.orders_table else "missing",
        "products_table": "ok" if settings.products_table else "missing",
        "redis_host": "ok" if settings.redis_host else "missing",
    }

    if dependencies.configuration_error:
        health_status["status"] = "unhealthy"
        health_status["checks"]["store"] = dependencies.configuration_error
        return health_status

    service = dependencies.order_service
    if service is None:
        health_status["status"] = "unhealthy"
        health_status["checks"]["store"] = "not_initialized"
    elif await service.fetcher.store.health_check():
        health_status["checks"]["store"] = "ok"
    else:
        health_status["status"] = "degraded"
        health_status["checks"]["store"] = "unreachable"

    return health_status
