"""Like endpoints."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.api.deps import get_current_user_id, get_db
from socialhub.schemas.common import MessageResponse
from socialhub.schemas.engagement import LikeRequest
from socialhub.services import engagement_service

router = APIRouter(prefix="/likes", tags=["likes"])


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def like_post(
    data: LikeRequest,
    current_user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await engagement_service.add_like(db, current_user_id, data.post_id)
    await db.commit()
    return MessageResponse(message=f"Post {data.post_id} liked successfully")


@router.delete("/{post_id}", response_model=MessageResponse)
async def unlike_post(
    post_id: int,
    current_user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await engagement_service.remove_like(db, current_user_id, post_id)
    await db.commit()
    return MessageResponse(message=f"Removed like from post {post_id}")
