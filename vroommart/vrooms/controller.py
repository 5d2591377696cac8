from fastapi import APIRouter, Query
from starlette import status
from typing import List
from uuid import UUID

from ..database.core import DbSession
from ..auth.service import CurrentUser
from ..core.config import settings
from ..core.exceptions import NotFoundError, OwnershipError
from ..schemas.vroom import VroomCreate, VroomUpdate, VroomResponse, VroomWithProducts
from .service import VroomService

router = APIRouter(prefix="/vrooms", tags=["vrooms"])


@router.post("", response_model=VroomResponse, status_code=status.HTTP_201_CREATED)
async def create_vroom(vroom_data: VroomCreate, current_user: CurrentUser, db: DbSession):
    return VroomService.create_vroom(db, current_user.user_id, vroom_data)


@router.get("/trending", response_model=List[VroomResponse])
async def get_trending_vrooms(
    db: DbSession,
    limit: int = Query(settings.DEFAULT_TRENDING_LIMIT, ge=1, le=settings.MAX_PAGE_SIZE),
):
    return VroomService.get_trending_vrooms(db, limit)


@router.get("/{vroom_id}", response_model=VroomWithProducts)
async def get_vroom(vroom_id: UUID, db: DbSession):
    """Storefront: the vroom, its owner and the owner's available products"""
    if not VroomService.get_vroom(db, vroom_id):
        raise NotFoundError("Vroom", vroom_id)
    VroomService.increment_vroom_views(db, vroom_id)
    return VroomService.get_vroom_with_products(db, vroom_id)


@router.put("/{vroom_id}", response_model=VroomResponse)
async def update_vroom(
    vroom_id: UUID,
    vroom_data: VroomUpdate,
    current_user: CurrentUser,
    db: DbSession,
):
    vroom = VroomService.get_vroom(db, vroom_id)
    if not vroom:
        raise NotFoundError("Vroom", vroom_id)
    if vroom.user_id != current_user.user_id:
        raise OwnershipError("Vroom", "update")
    return VroomService.update_vroom(db, vroom_id, vroom_data)
