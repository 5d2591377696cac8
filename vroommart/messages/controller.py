from fastapi import APIRouter, Request
from starlette import status
from typing import List
from uuid import UUID

from ..database.core import DbSession
from ..auth.service import CurrentUser
from ..core.config import settings
from ..core.exceptions import NotFoundError, OwnershipError, InvalidOperationError
from ..core.rate_limiter import limiter
from ..schemas.message import MessageCreate, MessageResponse, MessageWithUsers, ConversationResponse
from ..users.service import UserService
from ..orders.service import OrderService
from .service import MessageService

router = APIRouter(tags=["messages"])


@router.post("/messages", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.MESSAGE_SEND_RATE_LIMIT)
async def send_message(
    request: Request,
    message_data: MessageCreate,
    current_user: CurrentUser,
    db: DbSession,
):
    if message_data.receiver_id == current_user.user_id:
        raise InvalidOperationError("You cannot message yourself")
    if not UserService.get_user(db, message_data.receiver_id):
        raise NotFoundError("User", message_data.receiver_id)
    if message_data.order_id is not None and not OrderService.get_order(db, message_data.order_id):
        raise NotFoundError("Order", message_data.order_id)
    return MessageService.send_message(db, current_user.user_id, message_data)


@router.post("/messages/{message_id}/read", response_model=MessageResponse)
async def mark_message_as_read(message_id: UUID, current_user: CurrentUser, db: DbSession):
    """Only the receiver can mark a message as read"""
    message = MessageService.get_message(db, message_id)
    if not message:
        raise NotFoundError("Message", message_id)
    if message.receiver_id != current_user.user_id:
        raise OwnershipError("Message", "mark")
    return MessageService.mark_message_as_read(db, message_id)


@router.get("/conversations", response_model=List[ConversationResponse])
async def get_conversations(current_user: CurrentUser, db: DbSession):
    return MessageService.get_user_conversations(db, current_user.user_id)


@router.get("/conversations/{user_id}", response_model=List[MessageWithUsers])
async def get_conversation(user_id: str, current_user: CurrentUser, db: DbSession):
    return MessageService.get_conversation(db, current_user.user_id, user_id)


@router.post("/conversations/{user_id}/read", status_code=status.HTTP_204_NO_CONTENT)
async def mark_conversation_as_read(user_id: str, current_user: CurrentUser, db: DbSession):
    MessageService.mark_conversation_as_read(db, current_user.user_id, user_id)
