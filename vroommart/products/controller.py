from fastapi import APIRouter, Query, Request
from starlette import status
from typing import List, Optional
from uuid import UUID

from ..database.core import DbSession
from ..auth.service import CurrentUser
from ..core.config import settings
from ..core.exceptions import NotFoundError, OwnershipError
from ..core.rate_limiter import limiter
from ..schemas.product import ProductCreate, ProductUpdate, ProductResponse, ProductWithUser
from ..services.recommendation_service import RecommendationService
from .service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


def _get_owned_product(db, product_id: UUID, user_id: str, action: str):
    product = ProductService.get_product(db, product_id)
    if not product:
        raise NotFoundError("Product", product_id)
    if product.user_id != user_id:
        raise OwnershipError("Product", action)
    return product


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.PRODUCT_CREATE_RATE_LIMIT)
async def create_product(
    request: Request,
    product_data: ProductCreate,
    current_user: CurrentUser,
    db: DbSession,
):
    """List a new product for sale"""
    return ProductService.create_product(db, current_user.user_id, product_data)


@router.get("", response_model=List[ProductWithUser])
async def get_products(
    db: DbSession,
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
):
    """Feed of available products, newest first"""
    return ProductService.get_products(db, limit=limit, offset=offset)


@router.get("/trending", response_model=List[ProductWithUser])
async def get_trending_products(
    db: DbSession,
    limit: int = Query(settings.DEFAULT_TRENDING_LIMIT, ge=1, le=settings.MAX_PAGE_SIZE),
):
    return ProductService.get_trending_products(db, limit)


@router.get("/search", response_model=List[ProductWithUser])
async def search_products(
    db: DbSession,
    q: str = Query("", max_length=200),
    hashtags: Optional[List[str]] = Query(None),
):
    """Search title/description; `hashtags` narrows to products sharing a tag."""
    return ProductService.search_products(db, q, hashtags)


@router.get("/recommended", response_model=List[ProductWithUser])
async def get_recommended_products(
    current_user: CurrentUser,
    db: DbSession,
    limit: int = Query(settings.DEFAULT_TRENDING_LIMIT, ge=1, le=settings.MAX_PAGE_SIZE),
):
    return RecommendationService.get_recommended_products(db, current_user.user_id, limit)


@router.get("/{product_id}", response_model=ProductWithUser)
async def get_product(product_id: UUID, db: DbSession):
    """Product detail; each read counts as a view"""
    if not ProductService.get_product(db, product_id):
        raise NotFoundError("Product", product_id)
    ProductService.increment_product_views(db, product_id)
    return ProductService.get_product_with_user(db, product_id)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: UUID,
    product_data: ProductUpdate,
    current_user: CurrentUser,
    db: DbSession,
):
    _get_owned_product(db, product_id, current_user.user_id, "update")
    return ProductService.update_product(db, product_id, product_data)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(product_id: UUID, current_user: CurrentUser, db: DbSession):
    _get_owned_product(db, product_id, current_user.user_id, "delete")
    ProductService.delete_product(db, product_id)


@router.post("/{product_id}/share", response_model=ProductResponse)
async def share_product(product_id: UUID, current_user: CurrentUser, db: DbSession):
    product = ProductService.increment_product_shares(db, product_id)
    if not product:
        raise NotFoundError("Product", product_id)
    return product
