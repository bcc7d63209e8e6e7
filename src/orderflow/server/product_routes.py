"""Product API routes: list plus create/read/update/delete by id."""

from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from orderflow.core.exceptions import OrderFlowError
from orderflow.core.logger import setup_logger
from orderflow.models.product import ProductCreate, ProductUpdate
from orderflow.server.dependencies import get_product_service
from orderflow.services.product_service import ProductService

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])


def _failure(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": message}
    )


@router.get("")
async def list_products(
    service: ProductService = Depends(get_product_service),
) -> Dict[str, Any]:
    """Get every product, normalized for display."""
    try:
        result = await service.list_products()
    except OrderFlowError:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch products: {e}", exc_info=True)
        return _failure("Failed to fetch products")

    return {"products": result.records, "totalCount": result.total_count}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(
    body: ProductCreate,
    service: ProductService = Depends(get_product_service),
) -> Dict[str, Any]:
    """Create a product. Name and price are required."""
    try:
        return await service.create_product(body)
    except OrderFlowError:
        raise
    except Exception as e:
        logger.error(f"Failed to create product: {e}", exc_info=True)
        return _failure("Failed to create product")


@router.get("/{product_id}")
async def get_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> Dict[str, Any]:
    """Get a single stored product."""
    try:
        return await service.get_product(product_id)
    except OrderFlowError:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch product {product_id}: {e}", exc_info=True)
        return _failure("Failed to fetch product")


@router.put("/{product_id}")
async def update_product(
    product_id: str,
    body: ProductUpdate,
    service: ProductService = Depends(get_product_service),
) -> Dict[str, Any]:
    """Update name and/or price; ``updatedAt`` is always refreshed."""
    try:
        return await service.update_product(product_id, body)
    except OrderFlowError:
        raise
    except Exception as e:
        logger.error(f"Failed to update product {product_id}: {e}", exc_info=True)
        return _failure("Failed to update product")


@router.delete("/{product_id}")
async def delete_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> Dict[str, Any]:
    """Delete a product."""
    try:
        await service.delete_product(product_id)
    except OrderFlowError:
        raise
    except Exception as e:
        logger.error(f"Failed to delete product {product_id}: {e}", exc_info=True)
        return _failure("Failed to delete product")

    return {"message": f"Product {product_id} deleted successfully"}
