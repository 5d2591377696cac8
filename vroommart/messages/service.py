from sqlalchemy.orm import Session, joinedload
from sqlalchemy import and_, or_, func
from typing import Any, Dict, List, Optional
from uuid import UUID
import logging

from .models import Message
from ..users.models import User
from ..schemas.message import MessageCreate

logger = logging.getLogger(__name__)


class MessageService:

    @staticmethod
    def send_message(db: Session, sender_id: str, message_data: MessageCreate) -> Message:
        try:
            message = Message(sender_id=sender_id, **message_data.model_dump())
            db.add(message)
            db.commit()
            db.refresh(message)
            logger.info(f"Message {message.id} sent from {sender_id} to {message.receiver_id}")
            return message
        except Exception as e:
            logger.error(f"Error sending message from {sender_id}: {e}")
            db.rollback()
            raise

    @staticmethod
    def get_message(db: Session, message_id: UUID) -> Optional[Message]:
        return db.query(Message).filter(Message.id == message_id).first()

    @staticmethod
    def get_conversation(db: Session, user_id: str, other_user_id: str) -> List[Message]:
        """Messages exchanged in both directions, oldest first"""
        return (
            db.query(Message)
            .options(joinedload(Message.sender), joinedload(Message.receiver))
            .filter(
                or_(
                    and_(Message.sender_id == user_id, Message.receiver_id == other_user_id),
                    and_(Message.sender_id == other_user_id, Message.receiver_id == user_id),
                )
            )
            .order_by(Message.created_at.asc(), Message.id.asc())
            .all()
        )

    @staticmethod
    def get_user_conversations(db: Session, user_id: str) -> List[Dict[str, Any]]:
        """One entry per counterpart: the counterpart, the latest message and
        how many messages from them are still unread. Most recent first."""
        messages = (
            db.query(Message)
            .filter(or_(Message.sender_id == user_id, Message.receiver_id == user_id))
            .order_by(Message.created_at.desc(), Message.id.desc())
            .all()
        )

        latest: Dict[str, Message] = {}
        for message in messages:
            other_id = message.receiver_id if message.sender_id == user_id else message.sender_id
            if other_id not in latest:
                latest[other_id] = message

        if not latest:
            return []

        unread_rows = (
            db.query(Message.sender_id, func.count(Message.id))
            .filter(Message.receiver_id == user_id, Message.is_read.is_(False))
            .group_by(Message.sender_id)
            .all()
        )
        unread = {sender_id: count for sender_id, count in unread_rows}

        users = {u.id: u for u in db.query(User).filter(User.id.in_(list(latest))).all()}

        conversations = []
        for other_id, message in latest.items():
            user = users.get(other_id)
            if user is None:
                continue
            conversations.append(
                {"user": user, "last_message": message, "unread_count": unread.get(other_id, 0)}
            )
        return conversations

    @staticmethod
    def mark_message_as_read(db: Session, message_id: UUID) -> Optional[Message]:
        message = db.query(Message).filter(Message.id == message_id).first()
        if not message:
            return None
        message.is_read = True
        db.commit()
        db.refresh(message)
        return message

    @staticmethod
    def mark_conversation_as_read(db: Session, user_id: str, other_user_id: str) -> int:
        """Mark everything `other_user_id` sent to `user_id` as read."""
        updated = (
            db.query(Message)
            .filter(
                Message.sender_id == other_user_id,
                Message.receiver_id == user_id,
                Message.is_read.is_(False),
            )
            .update({Message.is_read: True}, synchronize_session=False)
        )
        db.commit()
        logger.info(f"Marked {updated} messages from {other_user_id} as read for {user_id}")
        return updated
