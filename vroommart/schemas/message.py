from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from uuid import UUID

from .user import UserResponse


class MessageCreate(BaseModel):
    receiver_id: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1, max_length=5000)
    order_id: Optional[UUID] = None


class MessageResponse(BaseModel):
    id: UUID
    sender_id: str
    receiver_id: str
    content: str
    order_id: Optional[UUID] = None
    is_read: bool
    created_at: datetime

    class Config:
        from_attributes = True


class MessageWithUsers(MessageResponse):
    sender: UserResponse
    receiver: UserResponse


class ConversationResponse(BaseModel):
    user: UserResponse
    last_message: MessageResponse
    unread_count: int

    class Config:
        from_attributes = True
