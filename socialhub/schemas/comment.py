"""Pydantic schemas for Comment."""
from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class CommentCreate(BaseModel):
    text_content: str = Field(..., min_length=1)
    post_id: int

    @field_validator("text_content")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Comment cannot be empty")
        return v


class CommentResponse(BaseModel):
    id: int
    text_content: str
    comment_user_id: int
    post_id: int
    created_at: datetime | None = None
    name: str
    profile_picture: str | None = None

    model_config = {"from_attributes": True}
