"""Pydantic schemas for Story."""
from datetime import datetime

from pydantic import BaseModel


class StoryResponse(BaseModel):
    id: int
    story_user_id: int
    image_url: str | None = None
    blurhash_string: str | None = None
    created_at: datetime | None = None
    name: str
    profile_picture: str | None = None

    model_config = {"from_attributes": True}
