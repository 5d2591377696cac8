from fastapi import APIRouter
from starlette import status
from uuid import UUID

from ..database.core import DbSession
from ..auth.service import CurrentUser
from ..core.exceptions import NotFoundError, InvalidOperationError
from ..schemas.social import (
    FollowResponse,
    VroomFollowResponse,
    ProductLikeResponse,
    ProductBookmarkResponse,
    FollowStatusResponse,
    LikeStatusResponse,
    BookmarkStatusResponse,
)
from ..users.service import UserService
from ..products.service import ProductService
from ..vrooms.service import VroomService
from .service import SocialService

router = APIRouter(tags=["social"])


def _require_product(db, product_id: UUID):
    if not ProductService.get_product(db, product_id):
        raise NotFoundError("Product", product_id)


# --- user follows ---

@router.post("/users/{user_id}/follow", response_model=FollowResponse, status_code=status.HTTP_201_CREATED)
async def follow_user(user_id: str, current_user: CurrentUser, db: DbSession):
    if user_id == current_user.user_id:
        raise InvalidOperationError("You cannot follow yourself", context={"user_id": user_id})
    if not UserService.get_user(db, user_id):
        raise NotFoundError("User", user_id)
    return SocialService.follow_user(db, current_user.user_id, user_id)


@router.delete("/users/{user_id}/follow", status_code=status.HTTP_204_NO_CONTENT)
async def unfollow_user(user_id: str, current_user: CurrentUser, db: DbSession):
    SocialService.unfollow_user(db, current_user.user_id, user_id)


@router.get("/users/{user_id}/follow-status", response_model=FollowStatusResponse)
async def get_follow_status(user_id: str, current_user: CurrentUser, db: DbSession):
    return FollowStatusResponse(is_following=SocialService.is_following_user(db, current_user.user_id, user_id))


# --- vroom follows ---

@router.post("/vrooms/{vroom_id}/follow", response_model=VroomFollowResponse, status_code=status.HTTP_201_CREATED)
async def follow_vroom(vroom_id: UUID, current_user: CurrentUser, db: DbSession):
    if not VroomService.get_vroom(db, vroom_id):
        raise NotFoundError("Vroom", vroom_id)
    return SocialService.follow_vroom(db, current_user.user_id, vroom_id)


@router.delete("/vrooms/{vroom_id}/follow", status_code=status.HTTP_204_NO_CONTENT)
async def unfollow_vroom(vroom_id: UUID, current_user: CurrentUser, db: DbSession):
    SocialService.unfollow_vroom(db, current_user.user_id, vroom_id)


@router.get("/vrooms/{vroom_id}/follow-status", response_model=FollowStatusResponse)
async def get_vroom_follow_status(vroom_id: UUID, current_user: CurrentUser, db: DbSession):
    return FollowStatusResponse(is_following=SocialService.is_following_vroom(db, current_user.user_id, vroom_id))


# --- likes ---

@router.post("/products/{product_id}/like", response_model=ProductLikeResponse, status_code=status.HTTP_201_CREATED)
async def like_product(product_id: UUID, current_user: CurrentUser, db: DbSession):
    _require_product(db, product_id)
    return SocialService.like_product(db, current_user.user_id, product_id)


@router.delete("/products/{product_id}/like", status_code=status.HTTP_204_NO_CONTENT)
async def unlike_product(product_id: UUID, current_user: CurrentUser, db: DbSession):
    SocialService.unlike_product(db, current_user.user_id, product_id)


@router.get("/products/{product_id}/like-status", response_model=LikeStatusResponse)
async def get_like_status(product_id: UUID, current_user: CurrentUser, db: DbSession):
    return LikeStatusResponse(is_liked=SocialService.is_product_liked(db, current_user.user_id, product_id))


# --- bookmarks ---

@router.post("/products/{product_id}/bookmark", response_model=ProductBookmarkResponse, status_code=status.HTTP_201_CREATED)
async def bookmark_product(product_id: UUID, current_user: CurrentUser, db: DbSession):
    _require_product(db, product_id)
    return SocialService.bookmark_product(db, current_user.user_id, product_id)


@router.delete("/products/{product_id}/bookmark", status_code=status.HTTP_204_NO_CONTENT)
async def unbookmark_product(product_id: UUID, current_user: CurrentUser, db: DbSession):
    SocialService.unbookmark_product(db, current_user.user_id, product_id)


@router.get("/products/{product_id}/bookmark-status", response_model=BookmarkStatusResponse)
async def get_bookmark_status(product_id: UUID, current_user: CurrentUser, db: DbSession):
    return BookmarkStatusResponse(is_bookmarked=SocialService.is_product_bookmarked(db, current_user.user_id, product_id))
