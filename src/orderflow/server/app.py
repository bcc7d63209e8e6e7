"""FastAPI application setup and configuration."""

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from orderflow.config.settings import settings
from orderflow.core.cache import RedisCache
from orderflow.core.exceptions import (
    ConfigurationError,
    RecordNotFoundError,
    ValidationError,
)
from orderflow.core.logger import setup_logger
from orderflow.server import dependencies
from orderflow.services.order_service import OrderService
from orderflow.services.product_service import ProductService
from orderflow.stores.redis_store import RedisStore, create_redis_client

logger = setup_logger(__name__)

# Global Redis client shared by the stores and the cache
_redis_client = None


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError):
        logger.error(f"Configuration error on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"error": str(exc)}
        )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)}
        )

    @app.exception_handler(RecordNotFoundError)
    async def not_found_handler(request: Request, exc: RecordNotFoundError):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"error": "Product not found"}
        )


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title="OrderFlow Dashboard API",
        version="1.0.0",
        description="Lists merchandise orders and products from the key-value store",
    )

    # Initialize GlitchTip error monitoring (Sentry-compatible)
    if settings.glitchtip_dsn:
        try:
            import logging
            import sentry_sdk
            from sentry_sdk.integrations.fastapi import FastApiIntegration
            from sentry_sdk.integrations.logging import LoggingIntegration

            sentry_sdk.init(
                dsn=settings.glitchtip_dsn,
                environment=settings.environment,
                integrations=[
                    FastApiIntegration(transaction_style="endpoint"),
                    LoggingIntegration(
                        level=None,  # Capture all log levels as breadcrumbs
                        event_level=logging.ERROR  # Send ERROR logs as events
                    ),
                ],
                traces_sample_rate=0.1,
                profiles_sample_rate=0.0,
                send_default_pii=False,
            )
            logger.info("GlitchTip error monitoring initialized")
        except Exception as e:
            logger.error(f"Failed to initialize GlitchTip: {e}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)

    # Import and include routers
    from orderflow.server import dashboard_routes, product_routes, routes

    app.include_router(routes.router)
    app.include_router(dashboard_routes.router)
    app.include_router(product_routes.router)

    @app.on_event("startup")
    async def startup_handler():
        """
        Build the store, cache and services.

        Missing settings are reported on every request (503) instead of
        surfacing later as opaque backend failures.
        """
        global _redis_client
        logger.info("Starting application resources...")

        try:
            _redis_client = create_redis_client()
            orders_store = RedisStore(_redis_client, settings.orders_table)
            products_store = RedisStore(_redis_client, settings.products_table)
        except ConfigurationError as e:
            logger.error(f"Store not configured: {e}")
            dependencies.set_services(None, None, error=str(e))
            return

        dependencies.set_services(
            OrderService(orders_store, cache=RedisCache(_redis_client)),
            ProductService(products_store),
        )
        logger.info(
            f"Application startup completed (orders={settings.orders_table}, "
            f"products={settings.products_table})"
        )

    @app.on_event("shutdown")
    async def shutdown_handler():
        """Close the Redis connection pool."""
        global _redis_client
        logger.info("Starting graceful shutdown...")

        dependencies.set_services(None, None)
        if _redis_client is not None:
            try:
                await _redis_client.aclose()
            except Exception as e:
                logger.error(f"Error closing Redis client: {e}", exc_info=True)
            _redis_client = None

        logger.info("Graceful shutdown completed successfully")

    return app
