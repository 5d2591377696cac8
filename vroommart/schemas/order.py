from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from .user import UserResponse
from .product import ProductResponse


class ShippingAddress(BaseModel):
    country: str = Field(..., min_length=2, max_length=100)
    town: str = Field(..., min_length=1, max_length=100)
    street: str = Field(..., min_length=1, max_length=200)
    details: Optional[str] = Field(None, max_length=500)


class CreateOrderRequest(BaseModel):
    product_id: UUID
    quantity: int = Field(1, gt=0, le=100)
    shipping_address: ShippingAddress
    payment_method: str = Field("pay_on_delivery", pattern=r"^pay_on_delivery$")


class CheckoutRequest(BaseModel):
    shipping_address: ShippingAddress
    payment_method: str = Field("pay_on_delivery", pattern=r"^pay_on_delivery$")


class OrderStatusUpdate(BaseModel):
    status: str = Field(..., pattern=r"^(pending|confirmed|shipped|delivered|cancelled)$")


class OrderResponse(BaseModel):
    id: UUID
    buyer_id: str
    seller_id: str
    product_id: UUID
    quantity: int
    total_amount: Decimal
    status: str
    payment_method: str
    shipping_address: Optional[ShippingAddress] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class OrderDetailResponse(OrderResponse):
    buyer: UserResponse
    seller: UserResponse
    product: ProductResponse
