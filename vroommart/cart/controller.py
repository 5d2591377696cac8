from fastapi import APIRouter
from starlette import status
from typing import List
from uuid import UUID

from ..database.core import DbSession
from ..auth.service import CurrentUser
from ..core.exceptions import NotFoundError, OwnershipError, InvalidOperationError
from ..schemas.cart import (
    CartItemCreate,
    CartItemUpdate,
    CartItemResponse,
    CartItemWithProduct,
    CartSummaryResponse,
)
from ..products.service import ProductService
from .service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def _get_owned_item(db, cart_item_id: UUID, user_id: str, action: str):
    item = CartService.get_cart_item(db, cart_item_id)
    if not item:
        raise NotFoundError("Cart item", cart_item_id)
    if item.user_id != user_id:
        raise OwnershipError("Cart item", action)
    return item


@router.post("", response_model=CartItemResponse, status_code=status.HTTP_201_CREATED)
async def add_to_cart(item_data: CartItemCreate, current_user: CurrentUser, db: DbSession):
    """Add a product; adding one already in the cart increases its quantity"""
    product = ProductService.get_product(db, item_data.product_id)
    if not product:
        raise NotFoundError("Product", item_data.product_id)
    if not product.is_available:
        raise InvalidOperationError("Product is not available", context={"product_id": str(product.id)})
    return CartService.add_to_cart(db, current_user.user_id, item_data.product_id, item_data.quantity)


@router.get("", response_model=List[CartItemWithProduct])
async def get_cart(current_user: CurrentUser, db: DbSession):
    return CartService.get_cart_items(db, current_user.user_id)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_cart(current_user: CurrentUser, db: DbSession):
    CartService.clear_cart(db, current_user.user_id)


@router.get("/summary", response_model=CartSummaryResponse)
async def get_cart_summary(current_user: CurrentUser, db: DbSession):
    return CartService.get_cart_summary(db, current_user.user_id)


@router.put("/{cart_item_id}", response_model=CartItemResponse)
async def update_cart_item(
    cart_item_id: UUID,
    item_data: CartItemUpdate,
    current_user: CurrentUser,
    db: DbSession,
):
    _get_owned_item(db, cart_item_id, current_user.user_id, "update")
    return CartService.update_cart_item(db, cart_item_id, item_data.quantity)


@router.delete("/{cart_item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_from_cart(cart_item_id: UUID, current_user: CurrentUser, db: DbSession):
    _get_owned_item(db, cart_item_id, current_user.user_id, "remove")
    CartService.remove_from_cart(db, cart_item_id)
