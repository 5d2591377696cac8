from sqlalchemy.orm import Session, joinedload
from sqlalchemy import or_
from typing import List, Optional
from uuid import UUID
from datetime import datetime, timezone
import logging

from .models import Product
from ..schemas.product import ProductCreate, ProductUpdate
from ..services.hashtag_service import normalize_hashtags

logger = logging.getLogger(__name__)


def _feed_order():
    # newest first; id breaks ties between rows created in the same instant
    return (Product.created_at.desc(), Product.id.desc())


class ProductService:

    @staticmethod
    def create_product(db: Session, user_id: str, product_data: ProductCreate) -> Product:
        """Create a product listing owned by `user_id` with zeroed counters."""
        try:
            data = product_data.model_dump()
            data["hashtags"] = normalize_hashtags(data.get("hashtags"))
            product = Product(user_id=user_id, **data)
            db.add(product)
            db.commit()
            db.refresh(product)
            logger.info(f"Created product {product.id} for user {user_id}")
            return product
        except Exception as e:
            logger.error(f"Error creating product for user {user_id}: {e}")
            db.rollback()
            raise

    @staticmethod
    def get_product(db: Session, product_id: UUID) -> Optional[Product]:
        return db.query(Product).filter(Product.id == product_id).first()

    @staticmethod
    def get_product_with_user(db: Session, product_id: UUID) -> Optional[Product]:
        return (
            db.query(Product)
            .options(joinedload(Product.user))
            .filter(Product.id == product_id)
            .first()
        )

    @staticmethod
    def get_products(db: Session, limit: int = 20, offset: int = 0) -> List[Product]:
        """Paginated feed of available products, newest first."""
        return (
            db.query(Product)
            .options(joinedload(Product.user))
            .filter(Product.is_available.is_(True))
            .order_by(*_feed_order())
            .offset(offset)
            .limit(limit)
            .all()
        )

    @staticmethod
    def get_products_by_user(db: Session, user_id: str) -> List[Product]:
        return (
            db.query(Product)
            .filter(Product.user_id == user_id, Product.is_available.is_(True))
            .order_by(*_feed_order())
            .all()
        )

    @staticmethod
    def update_product(db: Session, product_id: UUID, product_data: ProductUpdate) -> Optional[Product]:
        product = db.query(Product).filter(Product.id == product_id).first()
        if not product:
            logger.warning(f"Update requested for missing product {product_id}")
            return None

        changes = product_data.model_dump(exclude_unset=True)
        if "hashtags" in changes:
            changes["hashtags"] = normalize_hashtags(changes["hashtags"])
        if changes.get("image_urls") is None:
            changes.pop("image_urls", None)

        try:
            for field, value in changes.items():
                setattr(product, field, value)
            product.updated_at = datetime.now(timezone.utc)

            db.commit()
            db.refresh(product)
            logger.info(f"Updated product {product_id}: {sorted(changes)}")
            return product
        except Exception as e:
            logger.error(f"Error updating product {product_id}: {e}")
            db.rollback()
            raise

    @staticmethod
    def delete_product(db: Session, product_id: UUID) -> bool:
        product = db.query(Product).filter(Product.id == product_id).first()
        if not product:
            return False
        db.delete(product)
        db.commit()
        logger.info(f"Deleted product {product_id}")
        return True

    @staticmethod
    def search_products(db: Session, query: str, hashtags: Optional[List[str]] = None) -> List[Product]:
        """Case-insensitive substring search over title and description.

        When `hashtags` is given, a product must also share at least one of
        them. Hashtags live in a JSON column, so that part of the filter runs
        over the SQL result rather than inside the query.
        """
        q = db.query(Product).options(joinedload(Product.user)).filter(Product.is_available.is_(True))

        term = (query or "").strip()
        if term:
            pattern = f"%{term}%"
            q = q.filter(or_(Product.title.ilike(pattern), Product.description.ilike(pattern)))

        products = q.order_by(*_feed_order()).all()

        wanted = set(normalize_hashtags(hashtags))
        if wanted:
            products = [p for p in products if wanted.intersection(p.hashtags or [])]
        return products

    @staticmethod
    def get_trending_products(db: Session, limit: int = 10) -> List[Product]:
        return (
            db.query(Product)
            .options(joinedload(Product.user))
            .filter(Product.is_available.is_(True))
            .order_by(
                Product.likes_count.desc(),
                Product.views_count.desc(),
                *_feed_order(),
            )
            .limit(limit)
            .all()
        )

    @staticmethod
    def increment_product_views(db: Session, product_id: UUID) -> None:
        db.query(Product).filter(Product.id == product_id).update(
            {Product.views_count: Product.views_count + 1}, synchronize_session=False
        )
        db.commit()

    @staticmethod
    def increment_product_shares(db: Session, product_id: UUID) -> Optional[Product]:
        updated = db.query(Product).filter(Product.id == product_id).update(
            {Product.shares_count: Product.shares_count + 1}, synchronize_session=False
        )
        if not updated:
            return None
        db.commit()
        logger.info(f"Product {product_id} shared")
        return db.query(Product).filter(Product.id == product_id).first()
