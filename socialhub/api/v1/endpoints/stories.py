"""Story endpoints."""
from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.api.deps import get_admin_id, get_current_user_id, get_db, get_storage
from socialhub.schemas.common import MessageResponse
from socialhub.schemas.story import StoryResponse
from socialhub.services import story_service
from socialhub.services.storage_service import StorageBackend

router = APIRouter(prefix="/stories", tags=["stories"])


@router.get("", response_model=list[StoryResponse])
async def list_stories(
    user_id: int | None = Query(None),
    current_user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await story_service.list_stories(db, current_user_id, author_id=user_id)


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def add_story(
    image: UploadFile | None = File(None),
    current_user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    storage: StorageBackend = Depends(get_storage),
):
    image = image if image and image.filename else None
    await story_service.create_story(db, storage, current_user_id, image)
    await db.commit()
    return MessageResponse(message="Story added successfully")


@router.delete("/{story_id}", response_model=MessageResponse)
async def delete_story(
    story_id: int,
    current_user_id: int = Depends(get_current_user_id),
    admin_id: int | None = Depends(get_admin_id),
    db: AsyncSession = Depends(get_db),
    storage: StorageBackend = Depends(get_storage),
):
    await story_service.delete_story(db, storage, story_id, current_user_id, admin_id)
    await db.commit()
    return MessageResponse(message="Story deleted successfully")
