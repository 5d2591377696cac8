# vroommart/users/controller.py
from fastapi import APIRouter
from starlette import status
from typing import List

from ..database.core import DbSession
from ..auth.service import CurrentUser
from ..core.exceptions import NotFoundError
from ..schemas.user import UserResponse, UserProfileUpdate
from ..schemas.product import ProductResponse, ProductWithUser
from ..schemas.vroom import VroomResponse
from ..products.service import ProductService
from ..vrooms.service import VroomService
from ..social.service import SocialService
from .service import UserService

router = APIRouter(prefix="/users", tags=["users"])


def _require_user(db, user_id: str):
    user = UserService.get_user(db, user_id)
    if not user:
        raise NotFoundError("User", user_id)
    return user


@router.get("/me", response_model=UserResponse)
async def get_my_profile(current_user: CurrentUser, db: DbSession):
    return _require_user(db, current_user.user_id)


@router.patch("/me", response_model=UserResponse)
async def update_my_profile(profile_data: UserProfileUpdate, current_user: CurrentUser, db: DbSession):
    """Update the caller's public profile. Usernames are unique (409 on clash)."""
    user = UserService.update_profile(db, current_user.user_id, profile_data)
    if not user:
        raise NotFoundError("User", current_user.user_id)
    return user


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
async def delete_my_account(current_user: CurrentUser, db: DbSession):
    """Delete the caller and everything they own or authored."""
    if not UserService.delete_user(db, current_user.user_id):
        raise NotFoundError("User", current_user.user_id)


@router.get("/me/bookmarks", response_model=List[ProductWithUser])
async def get_my_bookmarks(current_user: CurrentUser, db: DbSession):
    return SocialService.get_user_bookmarks(db, current_user.user_id)


@router.get("/by-username/{username}", response_model=UserResponse)
async def get_user_by_username(username: str, db: DbSession):
    user = UserService.get_user_by_username(db, username)
    if not user:
        raise NotFoundError("User", username)
    return user


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, db: DbSession):
    return _require_user(db, user_id)


@router.get("/{user_id}/products", response_model=List[ProductResponse])
async def get_user_products(user_id: str, db: DbSession):
    _require_user(db, user_id)
    return ProductService.get_products_by_user(db, user_id)


@router.get("/{user_id}/vrooms", response_model=List[VroomResponse])
async def get_user_vrooms(user_id: str, db: DbSession):
    _require_user(db, user_id)
    return VroomService.get_vrooms_by_user(db, user_id)


@router.get("/{user_id}/followers", response_model=List[UserResponse])
async def get_user_followers(user_id: str, db: DbSession):
    _require_user(db, user_id)
    return UserService.get_user_followers(db, user_id)


@router.get("/{user_id}/following", response_model=List[UserResponse])
async def get_user_following(user_id: str, db: DbSession):
    _require_user(db, user_id)
    return UserService.get_user_following(db, user_id)
