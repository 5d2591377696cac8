from pydantic import BaseModel


class TrendingHashtag(BaseModel):
    hashtag: str
    count: int
