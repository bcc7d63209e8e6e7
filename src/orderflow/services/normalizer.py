"""Normalization of stored records into fully populated domain records.

Records in the store are written by an external system and may omit any
field or nest the real payload under ``Item``. Every lookup here has a
literal default, so a missing or malformed field never raises: it falls back
to an empty string, zero, None, or an empty list. Upstream falsy values
(``""``, ``0``, ``None``) are treated as missing.

Only one level of nesting is normalized (addresses, customer, payment
details, line items, shipping lines); anything deeper is passed through.
"""

import math
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from orderflow.config.constants import (
    DEFAULT_CURRENCY,
    DEFAULT_MONEY,
    DEFAULT_ORDER_STATUS,
    DEFAULT_PRODUCT_ID,
    DEFAULT_PRODUCT_STATUS,
    DEFAULT_PRODUCT_TITLE,
    ORDER_STATUSES,
    PRODUCT_TAG_SEPARATOR,
)
from orderflow.models.order import (
    Address,
    Customer,
    LineItem,
    Order,
    OrderStatus,
    PaymentDetails,
    ShippingLine,
)
from orderflow.models.product import Product
from orderflow.models.raw import (
    RawAddress,
    RawCustomer,
    RawLineItem,
    RawPaymentDetails,
    RawRecord,
    RawShippingLine,
)

_TAG_RE = re.compile(r"<[^>]*>")

# Replaced in sequence, so "&amp;lt;" ends up as "<"
_HTML_ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
)


# ==============================================================================
# FIELD HELPERS
# ==============================================================================


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _sequence(value: Any) -> List[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def _text(value: Any, default: str = "") -> str:
    if not value:
        return default
    return str(value)


def _optional_text(value: Any) -> Optional[str]:
    if not value:
        return None
    return str(value)


def _int(value: Any, default: int = 0) -> int:
    if not value:
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default


def _optional_int(value: Any) -> Optional[int]:
    if not value:
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None


def _float(value: Any, default: float = 0.0) -> float:
    result = _optional_float(value)
    return default if result is None else result


def _optional_float(value: Any) -> Optional[float]:
    if not value:
        return None
    try:
        result = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    # inf and nan cannot be rendered as JSON
    return result if math.isfinite(result) else None


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def unwrap(raw: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return the payload of a stored record, looking inside ``Item`` first."""
    item = raw.get("Item")
    if isinstance(item, Mapping):
        return item
    return raw


# ==============================================================================
# TEXT HELPERS
# ==============================================================================


def strip_html_tags(html: Optional[str]) -> str:
    """
    Reduce an HTML fragment to plain text.

    Removes tags, decodes a fixed set of named entities and trims
    whitespace. Entities outside that set are left as they are.

    Args:
        html: HTML fragment (None or empty gives "")

    Returns:
        Plain text
    """
    if not html:
        return ""

    text = _TAG_RE.sub("", str(html))
    for entity, replacement in _HTML_ENTITIES:
        text = text.replace(entity, replacement)
    return text.strip()


def coerce_status(value: Any) -> OrderStatus:
    """Map an upstream financial status onto the closed display enum."""
    if isinstance(value, str) and value in ORDER_STATUSES:
        return OrderStatus(value)
    return OrderStatus(DEFAULT_ORDER_STATUS)


# ==============================================================================
# NESTED STRUCTURES
# ==============================================================================


def normalize_address(raw: RawAddress) -> Address:
    raw = _mapping(raw)
    return Address(
        first_name=_text(raw.get("first_name")),
        last_name=_text(raw.get("last_name")),
        company=_optional_text(raw.get("company")),
        address1=_text(raw.get("address1")),
        address2=_optional_text(raw.get("address2")),
        city=_text(raw.get("city")),
        province=_text(raw.get("province")),
        province_code=_text(raw.get("province_code")),
        country=_text(raw.get("country")),
        country_code=_text(raw.get("country_code")),
        zip=_text(raw.get("zip")),
        phone=_text(raw.get("phone")),
        latitude=_optional_float(raw.get("latitude")),
        longitude=_optional_float(raw.get("longitude")),
    )


def normalize_customer(raw: RawCustomer) -> Customer:
    raw = _mapping(raw)
    return Customer(
        id=_int(raw.get("id")),
        email=_text(raw.get("email")),
        first_name=_text(raw.get("first_name")),
        last_name=_text(raw.get("last_name")),
        phone=_optional_text(raw.get("phone")),
        created_at=_text(raw.get("created_at")),
        orders_count=_int(raw.get("orders_count")),
        total_spent=_text(raw.get("total_spent"), DEFAULT_MONEY),
        tax_exempt=bool(raw.get("tax_exempt")),
    )


def normalize_line_item(raw: RawLineItem) -> LineItem:
    raw = _mapping(raw)
    return LineItem(
        id=_int(raw.get("id")),
        title=_text(raw.get("title")),
        quantity=_int(raw.get("quantity")),
        price=_text(raw.get("price"), DEFAULT_MONEY),
        sku=_optional_text(raw.get("sku")),
        variant_title=_optional_text(raw.get("variant_title")),
        vendor=_optional_text(raw.get("vendor")),
        product_id=_optional_int(raw.get("product_id")),
        requires_shipping=bool(raw.get("requires_shipping")),
        taxable=bool(raw.get("taxable")),
        gift_card=bool(raw.get("gift_card")),
    )


def normalize_shipping_line(raw: RawShippingLine) -> ShippingLine:
    raw = _mapping(raw)
    return ShippingLine(
        id=_int(raw.get("id")),
        title=_text(raw.get("title")),
        price=_text(raw.get("price"), DEFAULT_MONEY),
        code=_optional_text(raw.get("code")),
        source=_text(raw.get("source")),
    )


def normalize_payment_details(raw: RawPaymentDetails) -> PaymentDetails:
    raw = _mapping(raw)
    return PaymentDetails(
        credit_card_bin=_optional_text(raw.get("credit_card_bin")),
        avs_result_code=_optional_text(raw.get("avs_result_code")),
        cvv_result_code=_optional_text(raw.get("cvv_result_code")),
        credit_card_number=_optional_text(raw.get("credit_card_number")),
        credit_card_company=_optional_text(raw.get("credit_card_company")),
    )


# ==============================================================================
# RECORDS
# ==============================================================================


def normalize_order(raw: RawRecord) -> Order:
    """
    Convert a stored order record into an Order.

    Args:
        raw: Stored record, payload either inline or under ``Item``

    Returns:
        Order with every field populated
    """
    raw = _mapping(raw)
    data: Dict[str, Any] = unwrap(raw)

    order_number = data.get("order_number")
    total_price = _text(data.get("total_price"), DEFAULT_MONEY)
    email = _text(data.get("email"))

    return Order(
        id=_text(raw.get("id")),
        order_id=_text(order_number),
        order_number=_int(order_number),
        email=email,
        customerEmail=email,
        total_price=total_price,
        totalPrice=_float(data.get("total_price")),
        subtotal_price=_text(data.get("subtotal_price"), DEFAULT_MONEY),
        total_tax=_text(data.get("total_tax"), DEFAULT_MONEY),
        currency=_text(data.get("currency"), DEFAULT_CURRENCY),
        financial_status=_text(data.get("financial_status")),
        status=coerce_status(data.get("financial_status")),
        fulfillment_status=_optional_text(data.get("fulfillment_status")),
        processed_at=_text(data.get("processed_at")),
        createdAt=_text(data.get("created_at") or data.get("processed_at"), _now_iso()),
        billing_address=normalize_address(data.get("billing_address")),
        shipping_address=normalize_address(data.get("shipping_address")),
        customer=normalize_customer(data.get("customer")),
        line_items=[normalize_line_item(item) for item in _sequence(data.get("line_items"))],
        shipping_lines=[
            normalize_shipping_line(line) for line in _sequence(data.get("shipping_lines"))
        ],
        payment_details=normalize_payment_details(data.get("payment_details")),
        note=_optional_text(data.get("note")),
        tags=_text(data.get("tags")),
        source_name=_text(data.get("source_name")),
    )


def _first_variant_price(variants: List[Any]) -> float:
    if not variants:
        return 0.0
    return _float(_mapping(variants[0]).get("price"))


def _image_url(data: Mapping[str, Any], images: List[Any]) -> str:
    primary = _mapping(data.get("image")).get("src")
    if primary:
        return str(primary)
    if images:
        return _text(_mapping(images[0]).get("src"))
    return ""


def normalize_product(raw: RawRecord) -> Product:
    """
    Convert a stored product record into a Product.

    Price comes from the first variant, the image from the primary image or
    the first gallery image, and tags are split out of the joined string.
    """
    raw = _mapping(raw)
    data: Dict[str, Any] = unwrap(raw)

    variants = _sequence(data.get("variants"))
    images = _sequence(data.get("images"))
    tags = data.get("tags")
    now = _now_iso()

    return Product(
        id=_text(raw.get("id"), DEFAULT_PRODUCT_ID),
        title=_text(data.get("title"), DEFAULT_PRODUCT_TITLE),
        description=strip_html_tags(data.get("body_html")),
        price=_first_variant_price(variants),
        image_url=_image_url(data, images),
        vendor=_text(data.get("vendor")),
        product_type=_text(data.get("product_type")),
        created_at=_text(data.get("created_at"), now),
        updated_at=_text(data.get("updated_at"), now),
        status=_text(data.get("status"), DEFAULT_PRODUCT_STATUS),
        tags=str(tags).split(PRODUCT_TAG_SEPARATOR) if tags else [],
        variants=variants,
        images=images,
    )
