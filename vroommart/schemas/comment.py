from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from uuid import UUID

from .user import UserResponse


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)
    parent_id: Optional[UUID] = None


class CommentResponse(BaseModel):
    id: UUID
    user_id: str
    product_id: UUID
    content: str
    parent_id: Optional[UUID] = None
    created_at: datetime
    user: Optional[UserResponse] = None

    class Config:
        from_attributes = True
