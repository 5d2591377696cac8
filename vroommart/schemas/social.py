from pydantic import BaseModel
from datetime import datetime
from uuid import UUID


class FollowResponse(BaseModel):
    id: UUID
    follower_id: str
    following_id: str
    created_at: datetime

    class Config:
        from_attributes = True


class VroomFollowResponse(BaseModel):
    id: UUID
    user_id: str
    vroom_id: UUID
    created_at: datetime

    class Config:
        from_attributes = True


class ProductLikeResponse(BaseModel):
    id: UUID
    user_id: str
    product_id: UUID
    created_at: datetime

    class Config:
        from_attributes = True


class ProductBookmarkResponse(ProductLikeResponse):
    pass


class FollowStatusResponse(BaseModel):
    is_following: bool


class LikeStatusResponse(BaseModel):
    is_liked: bool


class BookmarkStatusResponse(BaseModel):
    is_bookmarked: bool
