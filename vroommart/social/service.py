from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError
from typing import List
from uuid import UUID
import logging

from .models import Follow, VroomFollow, ProductLike, ProductBookmark
from ..users.service import UserService
from ..products.models import Product
from ..vrooms.models import Vroom

logger = logging.getLogger(__name__)


class SocialService:
    """Follow/like/bookmark edges and the counters that mirror them.

    Every mutation is idempotent: creating an edge that exists returns the
    existing row, removing one that is absent is a no-op. The edge and its
    counter change are committed together.
    """

    # --- user follows ---

    @staticmethod
    def _find_follow(db: Session, follower_id: str, following_id: str):
        return (
            db.query(Follow)
            .filter(Follow.follower_id == follower_id, Follow.following_id == following_id)
            .first()
        )

    @staticmethod
    def follow_user(db: Session, follower_id: str, following_id: str) -> Follow:
        existing = SocialService._find_follow(db, follower_id, following_id)
        if existing:
            return existing

        try:
            follow = Follow(follower_id=follower_id, following_id=following_id)
            db.add(follow)
            db.flush()
            UserService.update_user_stats(db, follower_id, commit=False)
            UserService.update_user_stats(db, following_id, commit=False)
            db.commit()
            db.refresh(follow)
            logger.info(f"User {follower_id} followed {following_id}")
            return follow
        except IntegrityError:
            db.rollback()
            existing = SocialService._find_follow(db, follower_id, following_id)
            if existing:
                return existing
            raise
        except Exception as e:
            logger.error(f"Error following user {following_id} as {follower_id}: {e}")
            db.rollback()
            raise

    @staticmethod
    def unfollow_user(db: Session, follower_id: str, following_id: str) -> bool:
        deleted = (
            db.query(Follow)
            .filter(Follow.follower_id == follower_id, Follow.following_id == following_id)
            .delete(synchronize_session=False)
        )
        UserService.update_user_stats(db, follower_id, commit=False)
        UserService.update_user_stats(db, following_id, commit=False)
        db.commit()
        if deleted:
            logger.info(f"User {follower_id} unfollowed {following_id}")
        return bool(deleted)

    @staticmethod
    def is_following_user(db: Session, follower_id: str, following_id: str) -> bool:
        return (
            db.query(Follow.id)
            .filter(Follow.follower_id == follower_id, Follow.following_id == following_id)
            .first()
            is not None
        )

    # --- vroom follows ---

    @staticmethod
    def _find_vroom_follow(db: Session, user_id: str, vroom_id: UUID):
        return (
            db.query(VroomFollow)
            .filter(VroomFollow.user_id == user_id, VroomFollow.vroom_id == vroom_id)
            .first()
        )

    @staticmethod
    def follow_vroom(db: Session, user_id: str, vroom_id: UUID) -> VroomFollow:
        existing = SocialService._find_vroom_follow(db, user_id, vroom_id)
        if existing:
            return existing

        try:
            vroom_follow = VroomFollow(user_id=user_id, vroom_id=vroom_id)
            db.add(vroom_follow)
            db.query(Vroom).filter(Vroom.id == vroom_id).update(
                {Vroom.followers_count: Vroom.followers_count + 1}, synchronize_session=False
            )
            db.commit()
            db.refresh(vroom_follow)
            logger.info(f"User {user_id} followed vroom {vroom_id}")
            return vroom_follow
        except IntegrityError:
            db.rollback()
            existing = SocialService._find_vroom_follow(db, user_id, vroom_id)
            if existing:
                return existing
            raise
        except Exception as e:
            logger.error(f"Error following vroom {vroom_id} as {user_id}: {e}")
            db.rollback()
            raise

    @staticmethod
    def unfollow_vroom(db: Session, user_id: str, vroom_id: UUID) -> bool:
        deleted = (
            db.query(VroomFollow)
            .filter(VroomFollow.user_id == user_id, VroomFollow.vroom_id == vroom_id)
            .delete(synchronize_session=False)
        )
        if deleted:
            db.query(Vroom).filter(Vroom.id == vroom_id).update(
                {Vroom.followers_count: Vroom.followers_count - 1}, synchronize_session=False
            )
            logger.info(f"User {user_id} unfollowed vroom {vroom_id}")
        db.commit()
        return bool(deleted)

    @staticmethod
    def is_following_vroom(db: Session, user_id: str, vroom_id: UUID) -> bool:
        return (
            db.query(VroomFollow.id)
            .filter(VroomFollow.user_id == user_id, VroomFollow.vroom_id == vroom_id)
            .first()
            is not None
        )

    # --- likes ---

    @staticmethod
    def _find_like(db: Session, user_id: str, product_id: UUID):
        return (
            db.query(ProductLike)
            .filter(ProductLike.user_id == user_id, ProductLike.product_id == product_id)
            .first()
        )

    @staticmethod
    def like_product(db: Session, user_id: str, product_id: UUID) -> ProductLike:
        existing = SocialService._find_like(db, user_id, product_id)
        if existing:
            return existing

        try:
            like = ProductLike(user_id=user_id, product_id=product_id)
            db.add(like)
            db.query(Product).filter(Product.id == product_id).update(
                {Product.likes_count: Product.likes_count + 1}, synchronize_session=False
            )
            db.commit()
            db.refresh(like)
            logger.info(f"User {user_id} liked product {product_id}")
            return like
        except IntegrityError:
            db.rollback()
            existing = SocialService._find_like(db, user_id, product_id)
            if existing:
                return existing
            raise
        except Exception as e:
            logger.error(f"Error liking product {product_id} as {user_id}: {e}")
            db.rollback()
            raise

    @staticmethod
    def unlike_product(db: Session, user_id: str, product_id: UUID) -> bool:
        deleted = (
            db.query(ProductLike)
            .filter(ProductLike.user_id == user_id, ProductLike.product_id == product_id)
            .delete(synchronize_session=False)
        )
        if deleted:
            db.query(Product).filter(Product.id == product_id).update(
                {Product.likes_count: Product.likes_count - 1}, synchronize_session=False
            )
            logger.info(f"User {user_id} unliked product {product_id}")
        db.commit()
        return bool(deleted)

    @staticmethod
    def is_product_liked(db: Session, user_id: str, product_id: UUID) -> bool:
        return (
            db.query(ProductLike.id)
            .filter(ProductLike.user_id == user_id, ProductLike.product_id == product_id)
            .first()
            is not None
        )

    # --- bookmarks ---

    @staticmethod
    def _find_bookmark(db: Session, user_id: str, product_id: UUID):
        return (
            db.query(ProductBookmark)
            .filter(ProductBookmark.user_id == user_id, ProductBookmark.product_id == product_id)
            .first()
        )

    @staticmethod
    def bookmark_product(db: Session, user_id: str, product_id: UUID) -> ProductBookmark:
        existing = SocialService._find_bookmark(db, user_id, product_id)
        if existing:
            return existing

        try:
            bookmark = ProductBookmark(user_id=user_id, product_id=product_id)
            db.add(bookmark)
            db.commit()
            db.refresh(bookmark)
            logger.info(f"User {user_id} bookmarked product {product_id}")
            return bookmark
        except IntegrityError:
            db.rollback()
            existing = SocialService._find_bookmark(db, user_id, product_id)
            if existing:
                return existing
            raise
        except Exception as e:
            logger.error(f"Error bookmarking product {product_id} as {user_id}: {e}")
            db.rollback()
            raise

    @staticmethod
    def unbookmark_product(db: Session, user_id: str, product_id: UUID) -> bool:
        deleted = (
            db.query(ProductBookmark)
            .filter(ProductBookmark.user_id == user_id, ProductBookmark.product_id == product_id)
            .delete(synchronize_session=False)
        )
        db.commit()
        return bool(deleted)

    @staticmethod
    def is_product_bookmarked(db: Session, user_id: str, product_id: UUID) -> bool:
        return (
            db.query(ProductBookmark.id)
            .filter(ProductBookmark.user_id == user_id, ProductBookmark.product_id == product_id)
            .first()
            is not None
        )

    @staticmethod
    def get_user_bookmarks(db: Session, user_id: str) -> List[Product]:
        """Bookmarked products with their owners, most recently bookmarked first."""
        return (
            db.query(Product)
            .join(ProductBookmark, ProductBookmark.product_id == Product.id)
            .options(joinedload(Product.user))
            .filter(ProductBookmark.user_id == user_id)
            .order_by(ProductBookmark.created_at.desc())
            .all()
        )

