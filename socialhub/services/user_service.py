"""User profile, visibility and account logic."""
import logging

from fastapi import UploadFile
from sqlalchemy import and_, delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.core.config import settings
from socialhub.core.errors import (
    AuthorizationError,
    NotFoundError,
    StorageError,
    ValidationError,
    integrity_error_to_app_error,
)
from socialhub.core.security import get_password_hash, is_owner_or_admin, verify_password
from socialhub.models.engagement import UserRelationship
from socialhub.models.post import Post
from socialhub.models.story import Story
from socialhub.models.user import VISIBILITY_ONLINE, User
from socialhub.schemas.user import UserUpdate
from socialhub.services.image_service import upload_image
from socialhub.services.storage_service import (
    POST_IMAGES_BUCKET,
    PROFILE_PICTURES_BUCKET,
    STORIES_BUCKET,
    StorageBackend,
    object_name_from_url,
)

logger = logging.getLogger(__name__)

SUGGESTED_USERS_LIMIT = 5
ONLINE_FRIENDS_LIMIT = 10


async def get_admin_id(db: AsyncSession) -> int | None:
    """Id of the account registered with ADMIN_EMAIL, if any."""
    if not settings.ADMIN_EMAIL:
        return None
    result = await db.execute(select(User.id).where(User.email == settings.ADMIN_EMAIL.strip().lower()))
    return result.scalar_one_or_none()


async def update_profile(
    db: AsyncSession,
    storage: StorageBackend,
    user: User,
    data: UserUpdate,
    profile_picture: UploadFile | None = None,
    bg_picture: UploadFile | None = None,
) -> User:
    """Update profile fields; new pictures replace (and delete) the old ones.

    Old pictures are removed only after the row update has been flushed;
    uploads of a rejected update are discarded.
    """
    old_urls, new_urls = [], []
    if profile_picture is not None:
        new_url, _ = await upload_image(storage, PROFILE_PICTURES_BUCKET, profile_picture)
        new_urls.append(new_url)
        if user.profile_picture:
            old_urls.append(user.profile_picture)
        user.profile_picture = new_url
    if bg_picture is not None:
        new_url, _ = await upload_image(storage, PROFILE_PICTURES_BUCKET, bg_picture)
        new_urls.append(new_url)
        if user.bg_picture:
            old_urls.append(user.bg_picture)
        user.bg_picture = new_url

    user.name = data.name
    user.username = data.username
    user.email = data.email
    user.country = data.country
    user.status_text = data.status_text
    user.languages = data.languages
    try:
        await db.flush()
    except IntegrityError as exc:
        await _discard_uploads(storage, new_urls)
        raise integrity_error_to_app_error(exc) from exc

    if old_urls:
        await storage.remove(PROFILE_PICTURES_BUCKET, [object_name_from_url(u) for u in old_urls])
    return user


async def _discard_uploads(storage: StorageBackend, urls: list[str]) -> None:
    if not urls:
        return
    try:
        await storage.remove(PROFILE_PICTURES_BUCKET, [object_name_from_url(u) for u in urls])
    except StorageError:
        logger.warning("Could not discard unused uploads %s", urls)


async def check_password(db: AsyncSession, user_id: int, password: str) -> bool:
    result = await db.execute(select(User.password_hash).where(User.id == user_id))
    password_hash = result.scalar_one_or_none()
    return bool(password_hash) and verify_password(password, password_hash)


async def change_password(db: AsyncSession, user: User, old_password: str, new_password: str) -> None:
    if not verify_password(old_password, user.password_hash):
        raise ValidationError("Current password is incorrect")
    user.password_hash = get_password_hash(new_password)
    await db.flush()


async def set_visibility(db: AsyncSession, user_id: int, caller_id: int, visibility: str) -> None:
    if user_id != caller_id:
        raise AuthorizationError("You do not have permission to change this property")
    await db.execute(update(User).where(User.id == caller_id).values(visibility=visibility))


async def _blob_urls_of(db: AsyncSession, user_id: int) -> dict[str, list[str]]:
    """Every stored image owned by ``user_id``, grouped by bucket."""
    posts = await db.execute(select(Post.image).where(Post.user_id == user_id, Post.image.is_not(None)))
    stories = await db.execute(
        select(Story.image_url).where(Story.story_user_id == user_id, Story.image_url.is_not(None))
    )
    pictures = await db.execute(select(User.profile_picture, User.bg_picture).where(User.id == user_id))
    profile_urls = [url for row in pictures.all() for url in row if url]
    return {
        POST_IMAGES_BUCKET: list(posts.scalars().all()),
        STORIES_BUCKET: list(stories.scalars().all()),
        PROFILE_PICTURES_BUCKET: profile_urls,
    }


async def delete_user(
    db: AsyncSession,
    storage: StorageBackend,
    user_id: int,
    caller_id: int,
    admin_id: int | None,
) -> None:
    """Delete an account (owner or admin); its images are removed first."""
    exists = await db.execute(select(User.id).where(User.id == user_id).with_for_update())
    if exists.scalar_one_or_none() is None:
        raise NotFoundError("User not found")
    if not is_owner_or_admin(user_id, caller_id, admin_id):
        raise AuthorizationError("Only account owners or admins are allowed to delete accounts")

    for bucket, urls in (await _blob_urls_of(db, user_id)).items():
        if urls:
            await storage.remove(bucket, [object_name_from_url(u) for u in urls])

    await db.execute(delete(User).where(User.id == user_id))
    logger.info("User %s deleted by %s", user_id, caller_id)


async def get_suggested_users(db: AsyncSession, user_id: int) -> list:
    """Up to five users the caller does not follow yet."""
    result = await db.execute(
        select(User.id, User.name, User.profile_picture, User.username)
        .outerjoin(
            UserRelationship,
            and_(
                UserRelationship.is_followed_id == User.id,
                UserRelationship.is_following_id == user_id,
            ),
        )
        .where(UserRelationship.is_followed_id.is_(None), User.id != user_id)
        .limit(SUGGESTED_USERS_LIMIT)
    )
    return list(result.all())


async def get_online_friends(db: AsyncSession, user_id: int) -> list:
    result = await db.execute(
        select(User.id, User.name, User.profile_picture, User.username)
        .join(UserRelationship, UserRelationship.is_followed_id == User.id)
        .where(UserRelationship.is_following_id == user_id, User.visibility == VISIBILITY_ONLINE)
        .limit(ONLINE_FRIENDS_LIMIT)
    )
    return list(result.all())
