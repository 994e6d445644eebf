"""V1 API router aggregation."""
from fastapi import APIRouter

from socialhub.api.v1.endpoints import auth, comments, likes, posts, relationships, search, stories, users

api_router = APIRouter(prefix="/v1")
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(posts.router)
api_router.include_router(comments.router)
api_router.include_router(likes.router)
api_router.include_router(relationships.router)
api_router.include_router(stories.router)
api_router.include_router(search.router, prefix="/search", tags=["search"])
