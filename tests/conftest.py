"""Shared fixtures: in-memory stores and sample stored records."""

import copy
from typing import Any, Dict, List, Optional

import pytest

from orderflow.stores.base import KeyValueStore, ScanPage


class MemoryStore(KeyValueStore):
    """Dict-backed table. Pages follow id order; the token is the next offset."""

    def __init__(self, records: Optional[List[Dict[str, Any]]] = None):
        self.records: Dict[str, Dict[str, Any]] = {}
        self.scan_calls: List[Dict[str, Any]] = []
        for record in records or []:
            self.records[str(record["id"])] = copy.deepcopy(record)

    async def scan(self, page_token=None, limit=None) -> ScanPage:
        self.scan_calls.append({"page_token": page_token, "limit": limit})
        ids = sorted(self.records)
        start = int(page_token) if page_token else 0
        end = start + (limit or len(ids))
        items = [copy.deepcopy(self.records[i]) for i in ids[start:end]]
        next_token = str(end) if end < len(ids) else None
        return ScanPage(items=items, next_page_token=next_token, count=len(items))

    async def get(self, record_id):
        record = self.records.get(record_id)
        return copy.deepcopy(record) if record is not None else None

    async def put(self, record):
        self.records[str(record["id"])] = copy.deepcopy(record)
        return record

    async def delete(self, record_id):
        self.records.pop(record_id, None)

    async def health_check(self) -> bool:
        return True


class ScriptedStore(KeyValueStore):
    """Replays a fixed list of scan pages; an Exception entry is raised."""

    def __init__(self, pages: List[Any]):
        self.pages = pages
        self.scan_calls: List[Dict[str, Any]] = []

    async def scan(self, page_token=None, limit=None) -> ScanPage:
        self.scan_calls.append({"page_token": page_token, "limit": limit})
        index = int(page_token) if page_token else 0
        page = self.pages[index]
        if isinstance(page, Exception):
            raise page
        return page

    async def get(self, record_id):
        return None

    async def put(self, record):
        return record

    async def delete(self, record_id):
        return None

    async def health_check(self) -> bool:
        return False


def make_order(record_id: str, **fields) -> Dict[str, Any]:
    payload = {
        "order_number": 1000 + int(record_id),
        "email": f"buyer{record_id}@example.com",
        "total_price": "250.00",
        "financial_status": "paid",
        "created_at": f"2024-03-{int(record_id):02d}T10:00:00+05:30",
        "billing_address": {"first_name": "Asha", "city": "Pune", "country": "India"},
    }
    payload.update(fields)
    return {"id": record_id, **payload}


@pytest.fixture
def full_order_payload() -> Dict[str, Any]:
    return {
        "order_number": 1042,
        "email": "riya@example.com",
        "total_price": "1499.00",
        "subtotal_price": "1270.34",
        "total_tax": "228.66",
        "currency": "INR",
        "financial_status": "paid",
        "fulfillment_status": "fulfilled",
        "created_at": "2024-02-11T09:15:00+05:30",
        "processed_at": "2024-02-11T09:15:02+05:30",
        "billing_address": {
            "first_name": "Riya",
            "last_name": "Sharma",
            "company": "Inkhub",
            "address1": "12 MG Road",
            "city": "Bengaluru",
            "province": "Karnataka",
            "province_code": "KA",
            "country": "India",
            "country_code": "IN",
            "zip": "560001",
            "phone": "+919800000000",
            "latitude": 12.97,
            "longitude": 77.59,
        },
        "customer": {
            "id": 7001,
            "email": "riya@example.com",
            "first_name": "Riya",
            "last_name": "Sharma",
            "orders_count": 3,
            "total_spent": "4200.00",
        },
        "line_items": [
            {
                "id": 1,
                "title": "Poster - Night Sky",
                "quantity": 2,
                "price": "499.00",
                "sku": "PST-NS",
                "requires_shipping": True,
                "taxable": True,
            }
        ],
        "shipping_lines": [{"id": 5, "title": "Standard", "price": "50.00", "source": "shopify"}],
        "payment_details": {"credit_card_company": "Visa", "credit_card_number": "•••• 4242"},
        "note": "Gift wrap please",
        "tags": "gift, priority",
        "source_name": "web",
    }


@pytest.fixture
def order_store() -> MemoryStore:
    return MemoryStore(
        [
            make_order("1", financial_status="paid"),
            make_order("2", financial_status="pending", email="kiran@example.com"),
            make_order("3", financial_status="refunded"),
            make_order("4", financial_status="failed",
                       billing_address={"first_name": "Dev", "city": "Mumbai", "country": "India"}),
        ]
    )
