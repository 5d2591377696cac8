from sqlalchemy.orm import Session, joinedload
from typing import List, Optional
from uuid import UUID
from decimal import Decimal
from datetime import datetime, timezone
import logging

from .models import Order, ORDER_STATUSES
from ..cart.models import CartItem
from ..cart.service import CartService
from ..products.models import Product
from ..schemas.order import CreateOrderRequest, ShippingAddress
from ..core.exceptions import InvalidOperationError

logger = logging.getLogger(__name__)


def _order_total(product: Product, quantity: int) -> Decimal:
    return (Decimal(product.price) * quantity).quantize(Decimal("0.01"))


class OrderService:

    @staticmethod
    def create_order(db: Session, buyer_id: str, order_data: CreateOrderRequest) -> Optional[Order]:
        """Place a pay-on-delivery order for one product.

        The seller is the product's owner and the total is the current unit
        price times the quantity. Returns None when the product does not exist.
        """
        product = db.query(Product).filter(Product.id == order_data.product_id).first()
        if not product:
            logger.warning(f"Order requested for missing product {order_data.product_id}")
            return None

        try:
            order = Order(
                buyer_id=buyer_id,
                seller_id=product.user_id,
                product_id=product.id,
                quantity=order_data.quantity,
                total_amount=_order_total(product, order_data.quantity),
                status="pending",
                payment_method=order_data.payment_method,
                shipping_address=order_data.shipping_address.model_dump(),
            )
            db.add(order)
            db.commit()
            db.refresh(order)
            logger.info(f"Order {order.id} placed by {buyer_id} for product {product.id} (total {order.total_amount})")
            return order
        except Exception as e:
            logger.error(f"Error creating order for buyer {buyer_id}: {e}")
            db.rollback()
            raise

    @staticmethod
    def checkout_cart(
        db: Session,
        buyer_id: str,
        shipping_address: ShippingAddress,
        payment_method: str = "pay_on_delivery",
    ) -> List[Order]:
        """Turn every cart row into a pending order and empty the cart, in one commit."""
        items = (
            db.query(CartItem)
            .options(joinedload(CartItem.product))
            .filter(CartItem.user_id == buyer_id)
            .order_by(CartItem.created_at.asc(), CartItem.id.asc())
            .all()
        )
        if not items:
            raise InvalidOperationError("Cart is empty", context={"user_id": buyer_id})

        unavailable = [str(item.product_id) for item in items if not item.product.is_available]
        if unavailable:
            raise InvalidOperationError(
                "Some products in the cart are no longer available",
                context={"product_ids": unavailable},
            )

        address = shipping_address.model_dump()
        try:
            orders = []
            for item in items:
                order = Order(
                    buyer_id=buyer_id,
                    seller_id=item.product.user_id,
                    product_id=item.product_id,
                    quantity=item.quantity,
                    total_amount=_order_total(item.product, item.quantity),
                    status="pending",
                    payment_method=payment_method,
                    shipping_address=address,
                )
                db.add(order)
                orders.append(order)

            db.flush()
            CartService.clear_cart(db, buyer_id, commit=False)
            db.commit()
            for order in orders:
                db.refresh(order)
            logger.info(f"Checkout for {buyer_id} created {len(orders)} orders")
            return orders
        except Exception as e:
            logger.error(f"Error checking out cart for {buyer_id}: {e}")
            db.rollback()
            raise

    @staticmethod
    def get_order(db: Session, order_id: UUID) -> Optional[Order]:
        """Order with buyer, seller and product"""
        return (
            db.query(Order)
            .options(joinedload(Order.buyer), joinedload(Order.seller), joinedload(Order.product))
            .filter(Order.id == order_id)
            .first()
        )

    @staticmethod
    def get_user_orders(db: Session, user_id: str, order_type: str = "buyer") -> List[Order]:
        column = Order.seller_id if order_type == "seller" else Order.buyer_id
        return (
            db.query(Order)
            .options(joinedload(Order.buyer), joinedload(Order.seller), joinedload(Order.product))
            .filter(column == user_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .all()
        )

    @staticmethod
    def update_order_status(db: Session, order_id: UUID, status: str) -> Optional[Order]:
        """Move an order to any known status; transitions are not restricted."""
        if status not in ORDER_STATUSES:
            raise InvalidOperationError("Unknown order status", context={"status": status})

        order = db.query(Order).filter(Order.id == order_id).first()
        if not order:
            logger.warning(f"Status update requested for missing order {order_id}")
            return None

        previous = order.status
        order.status = status
        order.updated_at = datetime.now(timezone.utc)
        db.commit()
        db.refresh(order)
        logger.info(f"Order {order_id} status {previous} -> {status}")
        return order
