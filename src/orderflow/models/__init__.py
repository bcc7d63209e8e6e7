"""Models module - Normalized domain records and raw store shapes."""

from orderflow.models.order import (
    Address,
    Customer,
    LineItem,
    Order,
    OrderStatus,
    PaymentDetails,
    ShippingLine,
)
from orderflow.models.product import Product, ProductCreate, ProductUpdate

__all__ = [
    "Address",
    "Customer",
    "LineItem",
    "Order",
    "OrderStatus",
    "PaymentDetails",
    "ShippingLine",
    "Product",
    "ProductCreate",
    "ProductUpdate",
]
