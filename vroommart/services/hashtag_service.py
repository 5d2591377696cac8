# vroommart/services/hashtag_service.py

from collections import Counter
from typing import Dict, Iterable, List, Optional
from sqlalchemy.orm import Session
import logging

from ..products.models import Product

logger = logging.getLogger(__name__)


def normalize_hashtag(tag: str) -> str:
    """'  #Vintage ' -> 'vintage'"""
    return tag.strip().lstrip("#").strip().lower()


def normalize_hashtags(tags: Optional[Iterable[str]]) -> List[str]:
    """Normalize a tag list, dropping blanks and duplicates but keeping order."""
    normalized: List[str] = []
    for tag in tags or []:
        value = normalize_hashtag(tag)
        if value and value not in normalized:
            normalized.append(value)
    return normalized


class HashtagService:

    @staticmethod
    def get_trending_hashtags(db: Session, limit: int = 10) -> List[Dict[str, int]]:
        """Count hashtag frequency across available products.

        Every call loads the hashtag column of the whole available catalog and
        counts in memory; there is no cache or incremental index.
        """
        rows = db.query(Product.hashtags).filter(Product.is_available.is_(True)).all()

        counts: Counter = Counter()
        for (hashtags,) in rows:
            if hashtags:
                counts.update(hashtags)

        trending = [
            {"hashtag": hashtag, "count": count}
            for hashtag, count in counts.most_common(limit)
        ]
        logger.debug(f"Computed {len(trending)} trending hashtags from {len(rows)} products")
        return trending
