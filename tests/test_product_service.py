"""Tests for product create/read/update/delete."""

import pytest

from orderflow.core.exceptions import RecordNotFoundError, ValidationError
from orderflow.models.product import ProductCreate, ProductUpdate
from orderflow.services.product_service import ProductService

from conftest import MemoryStore

pytestmark = pytest.mark.asyncio


@pytest.fixture
def store():
    return MemoryStore(
        [
            {"id": "p1", "Item": {"title": "Night Sky", "variants": [{"price": "499.00"}]}},
            {"id": "p2", "name": "Tee", "price": 300, "createdAt": "2024-01-01T00:00:00Z"},
        ]
    )


async def test_list_products_normalizes(store):
    result = await ProductService(store).list_products()

    assert result.total_count == 2
    by_id = {product.id: product for product in result.records}
    assert by_id["p1"].title == "Night Sky"
    assert by_id["p1"].price == 499.0
    assert by_id["p2"].title == "Untitled Product"


async def test_get_product_returns_stored_record(store):
    product = await ProductService(store).get_product("p2")

    assert product["name"] == "Tee"


async def test_get_missing_product(store):
    with pytest.raises(RecordNotFoundError):
        await ProductService(store).get_product("nope")


async def test_create_product_uses_timestamp_id(store, monkeypatch):
    monkeypatch.setattr("orderflow.services.product_service.time.time", lambda: 1700000000.5)

    product = await ProductService(store).create_product(ProductCreate(name="Mug", price=250))

    assert product["id"] == "1700000000500"
    assert product["name"] == "Mug"
    assert product["price"] == 250
    assert "createdAt" in product
    assert store.records["1700000000500"]["name"] == "Mug"


@pytest.mark.parametrize("body", [{"name": "Mug"}, {"price": 10}, {}])
async def test_create_requires_name_and_price(store, body):
    with pytest.raises(ValidationError, match="Name and price are required"):
        await ProductService(store).create_product(ProductCreate(**body))


async def test_update_is_partial_and_stamps_updated_at(store):
    product = await ProductService(store).update_product("p2", ProductUpdate(price=350))

    assert product["name"] == "Tee"
    assert product["price"] == 350
    assert product["updatedAt"]
    assert store.records["p2"]["price"] == 350


async def test_update_requires_a_field(store):
    with pytest.raises(ValidationError):
        await ProductService(store).update_product("p2", ProductUpdate())


async def test_update_unknown_product_creates_it(store):
    product = await ProductService(store).update_product("nope", ProductUpdate(name="x"))

    assert product["id"] == "nope"
    assert product["name"] == "x"
    assert "price" not in product
    assert store.records["nope"] == product


async def test_delete_is_unconditional(store):
    service = ProductService(store)

    await service.delete_product("p1")
    await service.delete_product("p1")

    assert "p1" not in store.records
