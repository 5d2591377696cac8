from sqlalchemy.orm import Session, joinedload
from typing import Any, Dict, List, Optional
from uuid import UUID
from decimal import Decimal
from datetime import datetime, timezone
import logging

from .models import CartItem
from ..products.models import Product

logger = logging.getLogger(__name__)


class CartService:

    @staticmethod
    def add_to_cart(db: Session, user_id: str, product_id: UUID, quantity: int = 1) -> CartItem:
        """Add a product to the cart; an existing row for the product gets the
        quantity added instead of a second row being created."""
        try:
            item = (
                db.query(CartItem)
                .filter(CartItem.user_id == user_id, CartItem.product_id == product_id)
                .first()
            )
            if item:
                item.quantity = item.quantity + quantity
                item.updated_at = datetime.now(timezone.utc)
                logger.info(f"Merged {quantity} x {product_id} into cart item {item.id} for user {user_id}")
            else:
                item = CartItem(user_id=user_id, product_id=product_id, quantity=quantity)
                db.add(item)
                logger.info(f"Added {quantity} x {product_id} to cart for user {user_id}")

            db.commit()
            db.refresh(item)
            return item
        except Exception as e:
            logger.error(f"Error adding product {product_id} to cart for user {user_id}: {e}")
            db.rollback()
            raise

    @staticmethod
    def get_cart_items(db: Session, user_id: str) -> List[CartItem]:
        """Cart rows with their product and the product's owner, newest first"""
        return (
            db.query(CartItem)
            .options(joinedload(CartItem.product).joinedload(Product.user))
            .filter(CartItem.user_id == user_id)
            .order_by(CartItem.created_at.desc(), CartItem.id.desc())
            .all()
        )

    @staticmethod
    def get_cart_item(db: Session, cart_item_id: UUID) -> Optional[CartItem]:
        return db.query(CartItem).filter(CartItem.id == cart_item_id).first()

    @staticmethod
    def update_cart_item(db: Session, cart_item_id: UUID, quantity: int) -> Optional[CartItem]:
        item = db.query(CartItem).filter(CartItem.id == cart_item_id).first()
        if not item:
            logger.warning(f"Update requested for missing cart item {cart_item_id}")
            return None
        item.quantity = quantity
        item.updated_at = datetime.now(timezone.utc)
        db.commit()
        db.refresh(item)
        return item

    @staticmethod
    def remove_from_cart(db: Session, cart_item_id: UUID) -> bool:
        deleted = db.query(CartItem).filter(CartItem.id == cart_item_id).delete(synchronize_session=False)
        db.commit()
        return bool(deleted)

    @staticmethod
    def clear_cart(db: Session, user_id: str, commit: bool = True) -> int:
        deleted = db.query(CartItem).filter(CartItem.user_id == user_id).delete(synchronize_session=False)
        if commit:
            db.commit()
        logger.info(f"Cleared {deleted} cart items for user {user_id}")
        return deleted

    @staticmethod
    def get_cart_summary(db: Session, user_id: str) -> Dict[str, Any]:
        """Counts and value of the user's cart at current product prices"""
        items = CartService.get_cart_items(db, user_id)
        total_value = sum((Decimal(item.product.price) * item.quantity for item in items), Decimal("0"))
        return {
            "item_count": len(items),
            "total_quantity": sum(item.quantity for item in items),
            "total_value": total_value,
        }
