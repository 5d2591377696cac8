from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from .user import UserResponse


class ProductCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    image_url: Optional[str] = None
    image_urls: List[str] = Field(default_factory=list)
    hashtags: List[str] = Field(default_factory=list)
    category: Optional[str] = Field(None, max_length=100)
    stock: int = Field(1, ge=0)
    is_available: bool = True


class ProductUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    price: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    image_url: Optional[str] = None
    image_urls: Optional[List[str]] = None
    hashtags: Optional[List[str]] = None
    category: Optional[str] = Field(None, max_length=100)
    stock: Optional[int] = Field(None, ge=0)
    is_available: Optional[bool] = None

    @field_validator("title", "description", "price", "stock", "is_available")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not set to null")
        return value


class ProductResponse(BaseModel):
    id: UUID
    user_id: str
    title: str
    description: str
    price: Decimal
    image_url: Optional[str] = None
    image_urls: List[str] = []
    hashtags: List[str] = []
    category: Optional[str] = None
    stock: int
    is_available: bool
    likes_count: int
    shares_count: int
    comments_count: int
    views_count: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductWithUser(ProductResponse):
    user: UserResponse
