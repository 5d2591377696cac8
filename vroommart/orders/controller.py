from fastapi import APIRouter, Query
from starlette import status
from typing import List
from uuid import UUID

from ..database.core import DbSession
from ..auth.service import CurrentUser
from ..core.exceptions import NotFoundError, OwnershipError, InvalidOperationError
from ..schemas.order import (
    CreateOrderRequest,
    CheckoutRequest,
    OrderStatusUpdate,
    OrderResponse,
    OrderDetailResponse,
)
from ..products.service import ProductService
from .service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def _get_participant_order(db, order_id: UUID, user_id: str, action: str):
    order = OrderService.get_order(db, order_id)
    if not order:
        raise NotFoundError("Order", order_id)
    if user_id not in (order.buyer_id, order.seller_id):
        raise OwnershipError("Order", action)
    return order


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(order_data: CreateOrderRequest, current_user: CurrentUser, db: DbSession):
    """Place a pay-on-delivery order for a single product"""
    product = ProductService.get_product(db, order_data.product_id)
    if not product:
        raise NotFoundError("Product", order_data.product_id)
    if not product.is_available:
        raise InvalidOperationError("Product is not available", context={"product_id": str(product.id)})
    return OrderService.create_order(db, current_user.user_id, order_data)


@router.post("/checkout", response_model=List[OrderResponse], status_code=status.HTTP_201_CREATED)
async def checkout(checkout_data: CheckoutRequest, current_user: CurrentUser, db: DbSession):
    """Order everything in the cart and empty it"""
    return OrderService.checkout_cart(
        db, current_user.user_id, checkout_data.shipping_address, checkout_data.payment_method
    )


@router.get("", response_model=List[OrderDetailResponse])
async def get_orders(
    current_user: CurrentUser,
    db: DbSession,
    type: str = Query("buyer", pattern=r"^(buyer|seller)$"),
):
    return OrderService.get_user_orders(db, current_user.user_id, type)


@router.get("/{order_id}", response_model=OrderDetailResponse)
async def get_order(order_id: UUID, current_user: CurrentUser, db: DbSession):
    return _get_participant_order(db, order_id, current_user.user_id, "view")


@router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: UUID,
    status_data: OrderStatusUpdate,
    current_user: CurrentUser,
    db: DbSession,
):
    _get_participant_order(db, order_id, current_user.user_id, "update")
    return OrderService.update_order_status(db, order_id, status_data.status)
