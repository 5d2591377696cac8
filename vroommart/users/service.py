from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import List, Optional, Set
from datetime import datetime, timezone
import logging

from .models import User
from ..products.models import Product
from ..social.models import Follow, ProductLike, VroomFollow
from ..vrooms.models import Vroom
from ..comments.models import Comment
from ..schemas.user import UserUpsert, UserProfileUpdate
from ..core.exceptions import ConflictError

logger = logging.getLogger(__name__)


class UserService:

    @staticmethod
    def get_user(db: Session, user_id: str) -> Optional[User]:
        """Get user by ID"""
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_user_by_username(db: Session, username: str) -> Optional[User]:
        """Get user by username"""
        return db.query(User).filter(User.username == username).first()

    @staticmethod
    def upsert_user(db: Session, user_data: UserUpsert) -> User:
        """Insert the user, or refresh the identity fields of an existing one."""
        try:
            user = db.query(User).filter(User.id == user_data.id).first()
            if user:
                for field, value in user_data.model_dump(exclude={"id"}).items():
                    setattr(user, field, value)
                user.updated_at = datetime.now(timezone.utc)
            else:
                user = User(**user_data.model_dump())
                db.add(user)
                logger.info(f"Created new user from identity provider: {user_data.id}")

            db.commit()
            db.refresh(user)
            return user
        except Exception as e:
            logger.error(f"Error upserting user {user_data.id}: {e}")
            db.rollback()
            raise

    @staticmethod
    def update_user_stats(db: Session, user_id: str, commit: bool = True) -> None:
        """Recompute follower/following counters from the follows table."""
        followers_count = db.query(func.count(Follow.id)).filter(Follow.following_id == user_id).scalar()
        following_count = db.query(func.count(Follow.id)).filter(Follow.follower_id == user_id).scalar()

        db.query(User).filter(User.id == user_id).update(
            {
                User.followers_count: followers_count,
                User.following_count: following_count,
                User.updated_at: datetime.now(timezone.utc),
            },
            synchronize_session="fetch",
        )
        if commit:
            db.commit()

    @staticmethod
    def update_profile(db: Session, user_id: str, profile_data: UserProfileUpdate) -> Optional[User]:
        """Apply the fields present in the update; username must stay unique."""
        user = db.query(User).filter(User.id == user_id).first()
        if not user:
            return None

        changes = profile_data.model_dump(exclude_unset=True)
        new_username = changes.get("username")
        if new_username and new_username != user.username:
            taken = db.query(User.id).filter(User.username == new_username, User.id != user_id).first()
            if taken:
                raise ConflictError("Username is already taken", context={"username": new_username})

        for field, value in changes.items():
            setattr(user, field, value)
        user.updated_at = datetime.now(timezone.utc)

        db.commit()
        db.refresh(user)
        logger.info(f"Updated profile for user {user_id}: {sorted(changes)}")
        return user

    @staticmethod
    def get_user_followers(db: Session, user_id: str) -> List[User]:
        return (
            db.query(User)
            .join(Follow, Follow.follower_id == User.id)
            .filter(Follow.following_id == user_id)
            .order_by(Follow.created_at.desc())
            .all()
        )

    @staticmethod
    def get_user_following(db: Session, user_id: str) -> List[User]:
        return (
            db.query(User)
            .join(Follow, Follow.following_id == User.id)
            .filter(Follow.follower_id == user_id)
            .order_by(Follow.created_at.desc())
            .all()
        )

    @staticmethod
    def delete_user(db: Session, user_id: str) -> bool:
        """Delete a user and everything that references them.

        The ORM cascade removes products, vrooms, edges, comments, cart items,
        orders and messages. Counters that live on rows owned by *other* users
        (their follower counts, likes/comments on their products, follower
        counts of their vrooms) are recomputed afterwards so they keep
        matching the surviving rows.
        """
        user = db.query(User).filter(User.id == user_id).first()
        if not user:
            return False

        counterpart_ids: Set[str] = {
            row.following_id for row in db.query(Follow.following_id).filter(Follow.follower_id == user_id)
        }
        counterpart_ids.update(
            row.follower_id for row in db.query(Follow.follower_id).filter(Follow.following_id == user_id)
        )
        counterpart_ids.discard(user_id)

        touched_product_ids = {
            row.product_id for row in db.query(ProductLike.product_id).filter(ProductLike.user_id == user_id)
        }
        touched_product_ids.update(
            row.product_id for row in db.query(Comment.product_id).filter(Comment.user_id == user_id)
        )
        followed_vroom_ids = {
            row.vroom_id for row in db.query(VroomFollow.vroom_id).filter(VroomFollow.user_id == user_id)
        }

        try:
            db.delete(user)
            db.flush()

            for counterpart_id in counterpart_ids:
                UserService.update_user_stats(db, counterpart_id, commit=False)

            surviving = db.query(Product).filter(Product.id.in_(touched_product_ids)).all() if touched_product_ids else []
            for product in surviving:
                product.likes_count = db.query(func.count(ProductLike.id)).filter(ProductLike.product_id == product.id).scalar()
                product.comments_count = db.query(func.count(Comment.id)).filter(Comment.product_id == product.id).scalar()

            vrooms = db.query(Vroom).filter(Vroom.id.in_(followed_vroom_ids)).all() if followed_vroom_ids else []
            for vroom in vrooms:
                vroom.followers_count = db.query(func.count(VroomFollow.id)).filter(VroomFollow.vroom_id == vroom.id).scalar()

            db.commit()
            logger.info(
                f"Deleted user {user_id}; refreshed {len(counterpart_ids)} follow counters, "
                f"{len(surviving)} product counters and {len(vrooms)} vroom counters"
            )
            return True
        except Exception as e:
            logger.error(f"Error deleting user {user_id}: {e}")
            db.rollback()
            raise
