from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime
from uuid import UUID

from .user import UserResponse
from .product import ProductResponse


class VroomCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    banner_image_url: Optional[str] = None
    is_active: bool = True


class VroomUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    banner_image_url: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("name", "is_active")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not set to null")
        return value


class VroomResponse(BaseModel):
    id: UUID
    user_id: str
    name: str
    description: Optional[str] = None
    banner_image_url: Optional[str] = None
    followers_count: int
    views_count: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class VroomWithProducts(VroomResponse):
    user: UserResponse
    products: List[ProductResponse]
