"""Shapes of records as they sit in the store.

Everything is optional at every level: records are written by the commerce
platform's export and may omit any field. The payload may also be nested one
level deeper under ``Item``, with the record ``id`` kept on the outer mapping.
Only the normalizer consumes these types.
"""

from typing import Any, List, TypedDict


class RawAddress(TypedDict, total=False):
    first_name: str
    last_name: str
    company: str
    address1: str
    address2: str
    city: str
    province: str
    province_code: str
    country: str
    country_code: str
    zip: str
    phone: str
    latitude: Any
    longitude: Any


class RawCustomer(TypedDict, total=False):
    id: int
    email: str
    first_name: str
    last_name: str
    phone: str
    created_at: str
    orders_count: int
    total_spent: str
    tax_exempt: bool


class RawLineItem(TypedDict, total=False):
    id: int
    title: str
    quantity: int
    price: str
    sku: str
    variant_title: str
    vendor: str
    product_id: int
    requires_shipping: bool
    taxable: bool
    gift_card: bool


class RawShippingLine(TypedDict, total=False):
    id: int
    title: str
    price: str
    code: str
    source: str


class RawPaymentDetails(TypedDict, total=False):
    credit_card_bin: str
    avs_result_code: str
    cvv_result_code: str
    credit_card_number: str
    credit_card_company: str


class RawOrder(TypedDict, total=False):
    order_number: Any
    email: str
    total_price: str
    subtotal_price: str
    total_tax: str
    currency: str
    financial_status: str
    fulfillment_status: str
    created_at: str
    processed_at: str
    billing_address: RawAddress
    shipping_address: RawAddress
    customer: RawCustomer
    line_items: List[RawLineItem]
    shipping_lines: List[RawShippingLine]
    payment_details: RawPaymentDetails
    note: str
    tags: str
    source_name: str


class RawImage(TypedDict, total=False):
    src: str


class RawVariant(TypedDict, total=False):
    price: str


class RawProduct(TypedDict, total=False):
    title: str
    body_html: str
    vendor: str
    product_type: str
    created_at: str
    updated_at: str
    status: str
    tags: str
    image: RawImage
    images: List[RawImage]
    variants: List[RawVariant]


class RawRecord(TypedDict, total=False):
    """A stored record: the payload fields, optionally wrapped in ``Item``."""

    id: str
    Item: Any
