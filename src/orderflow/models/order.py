"""Pydantic models for normalized order data."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class OrderStatus(str, Enum):
    """Display status used for styling and filtering."""

    PAID = "paid"
    PENDING = "pending"
    FAILED = "failed"


class Address(BaseModel):
    """Billing or shipping address."""

    first_name: str = ""
    last_name: str = ""
    company: Optional[str] = None
    address1: str = ""
    address2: Optional[str] = None
    city: str = ""
    province: str = ""
    province_code: str = ""
    country: str = ""
    country_code: str = ""
    zip: str = ""
    phone: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class Customer(BaseModel):
    """Customer identity, contact and lifetime stats."""

    id: int = 0
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    phone: Optional[str] = None
    created_at: str = ""
    orders_count: int = 0
    total_spent: str = "0.00"
    tax_exempt: bool = False


class LineItem(BaseModel):
    """Single purchased item."""

    id: int = 0
    title: str = ""
    quantity: int = 0
    price: str = "0.00"
    sku: Optional[str] = None
    variant_title: Optional[str] = None
    vendor: Optional[str] = None
    product_id: Optional[int] = None
    requires_shipping: bool = False
    taxable: bool = False
    gift_card: bool = False


class ShippingLine(BaseModel):
    """Shipping method and its price."""

    id: int = 0
    title: str = ""
    price: str = "0.00"
    code: Optional[str] = None
    source: str = ""


class PaymentDetails(BaseModel):
    """Card metadata. Every field may be absent upstream."""

    credit_card_bin: Optional[str] = None
    avs_result_code: Optional[str] = None
    cvv_result_code: Optional[str] = None
    credit_card_number: Optional[str] = None
    credit_card_company: Optional[str] = None


class Order(BaseModel):
    """Fully populated order as shown on the dashboard."""

    id: str = ""
    order_id: str = ""
    order_number: int = 0
    email: str = ""
    customerEmail: str = ""
    total_price: str = "0.00"
    totalPrice: float = 0.0
    subtotal_price: str = "0.00"
    total_tax: str = "0.00"
    currency: str = "INR"
    financial_status: str = ""
    status: OrderStatus = OrderStatus.PENDING
    fulfillment_status: Optional[str] = None
    processed_at: str = ""
    createdAt: str = ""
    billing_address: Address = Field(default_factory=Address)
    shipping_address: Address = Field(default_factory=Address)
    customer: Customer = Field(default_factory=Customer)
    line_items: List[LineItem] = Field(default_factory=list)
    shipping_lines: List[ShippingLine] = Field(default_factory=list)
    payment_details: PaymentDetails = Field(default_factory=PaymentDetails)
    note: Optional[str] = None
    tags: str = ""
    source_name: str = ""
