from fastapi import APIRouter
from starlette import status
from typing import List
from uuid import UUID

from ..database.core import DbSession
from ..auth.service import CurrentUser
from ..core.exceptions import NotFoundError, InvalidOperationError
from ..schemas.comment import CommentCreate, CommentResponse
from ..products.service import ProductService
from .service import CommentService

router = APIRouter(tags=["comments"])


@router.post("/products/{product_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    product_id: UUID,
    comment_data: CommentCreate,
    current_user: CurrentUser,
    db: DbSession,
):
    """Comment on a product, or reply to one of its comments via `parent_id`."""
    if not ProductService.get_product(db, product_id):
        raise NotFoundError("Product", product_id)

    if comment_data.parent_id is not None:
        parent = CommentService.get_comment(db, comment_data.parent_id)
        if not parent:
            raise NotFoundError("Comment", comment_data.parent_id)
        if parent.product_id != product_id:
            raise InvalidOperationError(
                "Reply must belong to the same product as its parent",
                context={"parent_id": str(comment_data.parent_id)},
            )

    return CommentService.create_comment(
        db, current_user.user_id, product_id, comment_data.content, comment_data.parent_id
    )


@router.get("/products/{product_id}/comments", response_model=List[CommentResponse])
async def get_product_comments(product_id: UUID, db: DbSession):
    return CommentService.get_product_comments(db, product_id)


@router.get("/comments/{comment_id}/replies", response_model=List[CommentResponse])
async def get_comment_replies(comment_id: UUID, db: DbSession):
    if not CommentService.get_comment(db, comment_id):
        raise NotFoundError("Comment", comment_id)
    return CommentService.get_comment_replies(db, comment_id)
