"""Pydantic schemas for Post."""
from datetime import datetime

from pydantic import BaseModel


class PostFeedItem(BaseModel):
    """A post row augmented with its author, counters and viewer flags."""

    id: int
    user_id: int
    text_content: str
    image: str | None = None
    blurhash_string: str | None = None
    created_at: datetime | None = None
    name: str
    profile_picture: str | None = None
    likes_num: int = 0
    comments_num: int = 0
    is_liked: bool = False
    is_saved: bool = False

    model_config = {"from_attributes": True}


class SavePostRequest(BaseModel):
    post_id: int


class PostSearchResult(BaseModel):
    id: int
    user_id: int
    text_content: str
    image: str | None = None

    model_config = {"from_attributes": True}
