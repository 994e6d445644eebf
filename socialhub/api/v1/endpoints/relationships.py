"""Follow relationships."""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.api.deps import get_current_user_id, get_db
from socialhub.schemas.common import MessageResponse
from socialhub.schemas.engagement import FollowerId, FollowRequest
from socialhub.schemas.user import FollowedUser
from socialhub.services import engagement_service

router = APIRouter(prefix="/relationships", tags=["relationships"])


@router.get("/followed-users", response_model=list[FollowedUser])
async def list_followed_users(
    current_user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await engagement_service.get_followed_users(db, current_user_id)


@router.get("", response_model=list[FollowerId])
async def list_followers(
    user_id: int = Query(...),
    db: AsyncSession = Depends(get_db),
):
    """Ids of everyone following ``user_id``."""
    ids = await engagement_service.get_follower_ids(db, user_id)
    return [FollowerId(is_following_id=i) for i in ids]


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def follow(
    data: FollowRequest,
    current_user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await engagement_service.follow_user(db, current_user_id, data.user_id_to_follow)
    await db.commit()
    return MessageResponse(message=f"User {data.user_id_to_follow} followed")


@router.delete("", response_model=MessageResponse)
async def unfollow(
    user_id_to_unfollow: int = Query(...),
    current_user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await engagement_service.unfollow_user(db, current_user_id, user_id_to_unfollow)
    await db.commit()
    return MessageResponse(message=f"User {user_id_to_unfollow} unfollowed")
