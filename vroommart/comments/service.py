from sqlalchemy.orm import Session, joinedload
from typing import List, Optional
from uuid import UUID
import logging

from .models import Comment
from ..products.models import Product

logger = logging.getLogger(__name__)


class CommentService:

    @staticmethod
    def create_comment(
        db: Session,
        user_id: str,
        product_id: UUID,
        content: str,
        parent_id: Optional[UUID] = None,
    ) -> Comment:
        """Add a comment (or reply) and bump the product's comment counter once."""
        try:
            comment = Comment(user_id=user_id, product_id=product_id, content=content, parent_id=parent_id)
            db.add(comment)
            db.query(Product).filter(Product.id == product_id).update(
                {Product.comments_count: Product.comments_count + 1}, synchronize_session=False
            )
            db.commit()
            db.refresh(comment)
            logger.info(f"User {user_id} commented on product {product_id}" + (f" (reply to {parent_id})" if parent_id else ""))
            return comment
        except Exception as e:
            logger.error(f"Error creating comment on product {product_id}: {e}")
            db.rollback()
            raise

    @staticmethod
    def get_comment(db: Session, comment_id: UUID) -> Optional[Comment]:
        return db.query(Comment).filter(Comment.id == comment_id).first()

    @staticmethod
    def get_product_comments(db: Session, product_id: UUID) -> List[Comment]:
        """Top-level comments, newest first"""
        return (
            db.query(Comment)
            .options(joinedload(Comment.user))
            .filter(Comment.product_id == product_id, Comment.parent_id.is_(None))
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .all()
        )

    @staticmethod
    def get_comment_replies(db: Session, comment_id: UUID) -> List[Comment]:
        """Direct replies, oldest first"""
        return (
            db.query(Comment)
            .options(joinedload(Comment.user))
            .filter(Comment.parent_id == comment_id)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
            .all()
        )
