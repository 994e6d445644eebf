"""Schemas for likes and follow relationships."""
from pydantic import BaseModel


class LikeRequest(BaseModel):
    post_id: int


class FollowRequest(BaseModel):
    user_id_to_follow: int


class FollowerId(BaseModel):
    is_following_id: int
