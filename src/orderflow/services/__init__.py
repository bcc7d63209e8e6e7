"""Services module - Normalization, paged fetching and record services."""

from orderflow.services.fetcher import BatchResult, FetchResult, PaginatedFetcher
from orderflow.services.normalizer import (
    coerce_status,
    normalize_order,
    normalize_product,
    strip_html_tags,
)
from orderflow.services.order_service import OrderService
from orderflow.services.product_service import ProductService

__all__ = [
    "BatchResult",
    "FetchResult",
    "PaginatedFetcher",
    "coerce_status",
    "normalize_order",
    "normalize_product",
    "strip_html_tags",
    "OrderService",
    "ProductService",
]
