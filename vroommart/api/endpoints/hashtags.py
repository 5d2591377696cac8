# vroommart/api/endpoints/hashtags.py

from fastapi import APIRouter, Query
from typing import List

from ...database.core import DbSession
from ...core.config import settings
from ...schemas.analytics import TrendingHashtag
from ...services.hashtag_service import HashtagService

router = APIRouter()


@router.get("/trending", response_model=List[TrendingHashtag])
async def get_trending_hashtags(
    db: DbSession,
    limit: int = Query(settings.DEFAULT_TRENDING_LIMIT, ge=1, le=settings.MAX_PAGE_SIZE),
):
    """Most used hashtags across available products"""
    return HashtagService.get_trending_hashtags(db, limit)
