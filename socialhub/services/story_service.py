"""Story business logic."""
from fastapi import UploadFile
from sqlalchemy import delete, desc, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.core.errors import NotFoundError
from socialhub.core.security import ensure_owner_or_admin
from socialhub.models.engagement import UserRelationship
from socialhub.models.story import Story
from socialhub.models.user import User
from socialhub.schemas.story import StoryResponse
from socialhub.services.image_service import upload_image
from socialhub.services.storage_service import STORIES_BUCKET, StorageBackend, object_name_from_url

STORIES_LIMIT = 100


async def create_story(
    db: AsyncSession,
    storage: StorageBackend,
    user_id: int,
    image: UploadFile | None = None,
) -> Story:
    image_url, blurhash_string = None, None
    if image is not None:
        image_url, blurhash_string = await upload_image(storage, STORIES_BUCKET, image, with_blurhash=True)
    story = Story(story_user_id=user_id, image_url=image_url, blurhash_string=blurhash_string)
    db.add(story)
    await db.flush()
    await db.refresh(story)
    return story


async def list_stories(db: AsyncSession, viewer_id: int, author_id: int | None = None) -> list[StoryResponse]:
    """Stories of one author, or of the viewer and everyone the viewer follows."""
    q = select(
        Story.id,
        Story.story_user_id,
        Story.image_url,
        Story.blurhash_string,
        Story.created_at,
        User.name,
        User.profile_picture,
    ).join(User, User.id == Story.story_user_id)
    if author_id is not None:
        q = q.where(Story.story_user_id == author_id)
    else:
        followed = select(UserRelationship.is_followed_id).where(UserRelationship.is_following_id == viewer_id)
        q = q.where(or_(Story.story_user_id == viewer_id, Story.story_user_id.in_(followed)))
    result = await db.execute(q.order_by(desc(Story.created_at), desc(Story.id)).limit(STORIES_LIMIT))
    return [StoryResponse.model_validate(row._mapping) for row in result.all()]


async def delete_story(
    db: AsyncSession,
    storage: StorageBackend,
    story_id: int,
    caller_id: int,
    admin_id: int | None,
) -> None:
    result = await db.execute(
        select(Story.story_user_id, Story.image_url).where(Story.id == story_id).with_for_update()
    )
    row = result.one_or_none()
    if row is None:
        raise NotFoundError("Story not found")
    ensure_owner_or_admin(
        row.story_user_id, caller_id, admin_id, "Only story owners or admins are allowed to delete stories"
    )
    if row.image_url:
        await storage.remove(STORIES_BUCKET, [object_name_from_url(row.image_url)])
    await db.execute(delete(Story).where(Story.id == story_id))
