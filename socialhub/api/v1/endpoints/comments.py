"""Comment endpoints."""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.api.deps import get_admin_id, get_current_user_id, get_db
from socialhub.schemas.comment import CommentCreate, CommentResponse
from socialhub.schemas.common import MessageResponse
from socialhub.services import comment_service

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("", response_model=list[CommentResponse])
async def list_comments(
    post_id: int = Query(...),
    db: AsyncSession = Depends(get_db),
):
    return await comment_service.list_comments(db, post_id)


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def add_comment(
    data: CommentCreate,
    current_user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await comment_service.create_comment(db, current_user_id, data)
    await db.commit()
    return MessageResponse(message="Comment added successfully")


@router.delete("/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    comment_id: int,
    current_user_id: int = Depends(get_current_user_id),
    admin_id: int | None = Depends(get_admin_id),
    db: AsyncSession = Depends(get_db),
):
    await comment_service.delete_comment(db, comment_id, current_user_id, admin_id)
    await db.commit()
    return MessageResponse(message="Comment deleted successfully")
