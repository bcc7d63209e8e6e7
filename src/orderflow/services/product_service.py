"""Product service: listing plus create/read/update/delete on stored products."""

import time
from datetime import datetime, timezone
from typing import Any, Dict

from orderflow.core.exceptions import RecordNotFoundError, ValidationError
from orderflow.core.logger import setup_logger
from orderflow.models.product import Product, ProductCreate, ProductUpdate
from orderflow.services.fetcher import FetchResult, PaginatedFetcher
from orderflow.services.normalizer import normalize_product
from orderflow.stores.base import KeyValueStore

logger = setup_logger(__name__)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class ProductService:
    """Thin layer over the products table."""

    def __init__(self, store: KeyValueStore):
        self.store = store
        self.fetcher: PaginatedFetcher[Product] = PaginatedFetcher(store, normalize_product)

    async def list_products(self) -> FetchResult[Product]:
        """Get every product, normalized for display."""
        return await self.fetcher.fetch_all()

    async def get_product(self, product_id: str) -> Dict[str, Any]:
        """Get the stored product record as-is."""
        product = await self.store.get(product_id)
        if product is None:
            raise RecordNotFoundError(product_id)
        return product

    async def create_product(self, data: ProductCreate) -> Dict[str, Any]:
        """
        Store a new product.

        The id is the creation time in milliseconds, so two products created
        within the same millisecond overwrite each other.

        Raises:
            ValidationError: If name or price is missing
        """
        if not data.name or not data.price:
            raise ValidationError("Name and price are required")

        product = {
            "id": str(int(time.time() * 1000)),
            "name": data.name,
            "price": data.price,
            "createdAt": _timestamp(),
        }

        await self.store.put(product)
        logger.info(f"Created product {product['id']}")
        return product

    async def update_product(self, product_id: str, data: ProductUpdate) -> Dict[str, Any]:
        """
        Apply a partial update and refresh ``updatedAt``.

        An unknown id is not an error: the product is created with just the
        given fields.

        Raises:
            ValidationError: If neither name nor price is given
        """
        if not data.name and not data.price:
            raise ValidationError(
                "At least one field (name or price) is required for update"
            )

        product = await self.store.get(product_id) or {"id": product_id}

        if data.name:
            product["name"] = data.name
        if data.price:
            product["price"] = data.price
        product["updatedAt"] = _timestamp()

        await self.store.put(product)
        logger.info(f"Updated product {product_id}")
        return product

    async def delete_product(self, product_id: str) -> None:
        """Delete a product whether or not it exists."""
        await self.store.delete(product_id)
        logger.info(f"Deleted product {product_id}")
