"""Likes and follow relationships."""
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.core.errors import ValidationError, integrity_error_to_app_error
from socialhub.models.engagement import Like, UserRelationship
from socialhub.models.user import User


async def _insert(db: AsyncSession, row) -> None:
    db.add(row)
    try:
        await db.flush()
    except IntegrityError as exc:
        raise integrity_error_to_app_error(exc) from exc


async def add_like(db: AsyncSession, user_id: int, post_id: int) -> None:
    """Like a post. A second like of the same post raises ConstraintError."""
    await _insert(db, Like(like_user_id=user_id, like_post_id=post_id))


async def remove_like(db: AsyncSession, user_id: int, post_id: int) -> None:
    await db.execute(delete(Like).where(Like.like_user_id == user_id, Like.like_post_id == post_id))


async def follow_user(db: AsyncSession, follower_id: int, followed_id: int) -> None:
    if follower_id == followed_id:
        raise ValidationError("Cannot follow yourself")
    await _insert(db, UserRelationship(is_following_id=follower_id, is_followed_id=followed_id))


async def unfollow_user(db: AsyncSession, follower_id: int, followed_id: int) -> None:
    await db.execute(
        delete(UserRelationship).where(
            UserRelationship.is_following_id == follower_id,
            UserRelationship.is_followed_id == followed_id,
        )
    )


async def get_follower_ids(db: AsyncSession, user_id: int) -> list[int]:
    result = await db.execute(
        select(UserRelationship.is_following_id).where(UserRelationship.is_followed_id == user_id)
    )
    return list(result.scalars().all())


async def get_followed_users(db: AsyncSession, user_id: int) -> list:
    result = await db.execute(
        select(
            User.id,
            User.name,
            User.profile_picture,
            User.role,
            User.status_text,
            User.username,
            User.visibility,
        )
        .join(UserRelationship, UserRelationship.is_followed_id == User.id)
        .where(UserRelationship.is_following_id == user_id)
    )
    return list(result.all())
