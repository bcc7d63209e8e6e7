"""Pydantic models for product data."""

from typing import Any, List, Optional

from pydantic import BaseModel, Field


class Product(BaseModel):
    """Normalized product as shown on the products page."""

    id: str
    title: str
    description: str = ""
    price: float = 0.0
    image_url: str = ""
    vendor: str = ""
    product_type: str = ""
    created_at: str
    updated_at: str
    status: str = "active"
    tags: List[str] = Field(default_factory=list)
    variants: List[Any] = Field(default_factory=list)
    images: List[Any] = Field(default_factory=list)


class ProductCreate(BaseModel):
    """Body of a create-product request."""

    name: Optional[Any] = None
    price: Optional[Any] = None

    class Config:
        extra = "ignore"


class ProductUpdate(BaseModel):
    """Body of an update-product request. Only provided fields change."""

    name: Optional[Any] = None
    price: Optional[Any] = None

    class Config:
        extra = "ignore"
