# vroommart/services/recommendation_service.py

from typing import List, Set
from sqlalchemy.orm import Session, joinedload
import logging

from ..products.models import Product
from ..products.service import ProductService
from ..social.models import ProductLike, ProductBookmark

logger = logging.getLogger(__name__)


class RecommendationService:

    @staticmethod
    def get_user_hashtags(db: Session, user_id: str) -> Set[str]:
        """Hashtags of every product the user liked or bookmarked."""
        liked = db.query(ProductLike.product_id).filter(ProductLike.user_id == user_id)
        bookmarked = db.query(ProductBookmark.product_id).filter(ProductBookmark.user_id == user_id)
        product_ids = {row.product_id for row in liked} | {row.product_id for row in bookmarked}
        if not product_ids:
            return set()

        hashtags: Set[str] = set()
        for (tags,) in db.query(Product.hashtags).filter(Product.id.in_(product_ids)):
            hashtags.update(tags or [])
        return hashtags

    @staticmethod
    def get_recommended_products(db: Session, user_id: str, limit: int = 10) -> List[Product]:
        """Available products sharing a hashtag with the user's likes and
        bookmarks, most liked first. Users without such signals get the
        trending list instead."""
        hashtags = RecommendationService.get_user_hashtags(db, user_id)
        if not hashtags:
            logger.debug(f"No interaction hashtags for {user_id}; falling back to trending")
            return ProductService.get_trending_products(db, limit)

        candidates = (
            db.query(Product)
            .options(joinedload(Product.user))
            .filter(Product.is_available.is_(True))
            .order_by(Product.likes_count.desc(), Product.created_at.desc(), Product.id.desc())
            .all()
        )
        matches = [p for p in candidates if hashtags.intersection(p.hashtags or [])]
        return matches[:limit]
