"""Service instances shared by the routers.

Initialized in app.py on startup. Routes resolve them through the ``get_*``
functions so tests can swap them with ``app.dependency_overrides``.
"""

from typing import Optional

from orderflow.core.exceptions import ConfigurationError
from orderflow.services.order_service import OrderService
from orderflow.services.product_service import ProductService

# Global instances (initialized in app.py on startup)
order_service: Optional[OrderService] = None
product_service: Optional[ProductService] = None

# Why initialization failed, reported instead of a backend error
configuration_error: Optional[str] = None


def set_services(
    orders: Optional[OrderService],
    products: Optional[ProductService],
    error: Optional[str] = None,
) -> None:
    """Set the global service instances.

    Called by app.py during startup and shutdown.

    Args:
        orders: Initialized OrderService, or None
        products: Initialized ProductService, or None
        error: Configuration error message when services could not be built
    """
    global order_service, product_service, configuration_error
    order_service = orders
    product_service = products
    configuration_error = error


def _not_configured() -> ConfigurationError:
    return ConfigurationError(configuration_error or "Store not initialized")


def get_order_service() -> OrderService:
    if order_service is None:
        raise _not_configured()
    return order_service


def get_product_service() -> ProductService:
    if product_service is None:
        raise _not_configured()
    return product_service
