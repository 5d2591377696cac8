from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from .product import ProductWithUser


class CartItemCreate(BaseModel):
    product_id: UUID
    quantity: int = Field(1, gt=0, le=100)


class CartItemUpdate(BaseModel):
    quantity: int = Field(..., gt=0, le=100)


class CartItemResponse(BaseModel):
    id: UUID
    user_id: str
    product_id: UUID
    quantity: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CartItemWithProduct(CartItemResponse):
    product: ProductWithUser


class CartSummaryResponse(BaseModel):
    item_count: int
    total_quantity: int
    total_value: Decimal
