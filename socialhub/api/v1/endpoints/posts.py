"""Posts, feeds and bookmarks."""
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.api.deps import get_admin_id, get_current_user_id, get_db, get_storage
from socialhub.core.errors import ValidationError
from socialhub.schemas.common import MessageResponse
from socialhub.schemas.post import PostFeedItem, SavePostRequest
from socialhub.services import feed_service
from socialhub.services.storage_service import StorageBackend

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("/saved", response_model=list[PostFeedItem])
async def list_saved_posts(
    current_user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await feed_service.get_saved_feed(db, current_user_id)


@router.post("/saved", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def save_post(
    data: SavePostRequest,
    current_user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await feed_service.save_post(db, current_user_id, data.post_id)
    await db.commit()
    return MessageResponse(message="Post bookmarked successfully")


@router.delete("/saved/{post_id}", response_model=MessageResponse)
async def unsave_post(
    post_id: int,
    current_user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await feed_service.unsave_post(db, current_user_id, post_id)
    await db.commit()
    return MessageResponse(message="Post deleted from bookmarks successfully")


@router.get("", response_model=list[PostFeedItem])
async def list_posts(
    user_id: int | None = Query(None, description="Only this user's posts instead of the home feed"),
    current_user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    if user_id is not None:
        return await feed_service.get_profile_feed(db, current_user_id, user_id)
    return await feed_service.get_home_feed(db, current_user_id)


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    text_content: str = Form(""),
    image: UploadFile | None = File(None),
    current_user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    storage: StorageBackend = Depends(get_storage),
):
    if not text_content.strip():
        raise ValidationError("Post cannot be empty")
    image = image if image and image.filename else None
    await feed_service.create_post(db, storage, current_user_id, text_content, image)
    await db.commit()
    return MessageResponse(message="Post added successfully")


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: int,
    current_user_id: int = Depends(get_current_user_id),
    admin_id: int | None = Depends(get_admin_id),
    db: AsyncSession = Depends(get_db),
    storage: StorageBackend = Depends(get_storage),
):
    await feed_service.delete_post(db, storage, post_id, current_user_id, admin_id)
    await db.commit()
    return MessageResponse(message="Post deleted successfully")
