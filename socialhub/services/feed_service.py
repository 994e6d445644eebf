"""Feed and post business logic.

Every feed row is a post joined with its author plus four computed columns:
like count, comment count, and whether the viewer liked / bookmarked it.
"""
from fastapi import UploadFile
from sqlalchemy import Select, delete, desc, exists, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from socialhub.core.errors import NotFoundError, integrity_error_to_app_error
from socialhub.core.security import ensure_owner_or_admin
from socialhub.models.comment import Comment
from socialhub.models.engagement import Like, SavedPost, UserRelationship
from socialhub.models.post import Post
from socialhub.models.user import User
from socialhub.schemas.post import PostFeedItem
from socialhub.services.image_service import upload_image
from socialhub.services.storage_service import POST_IMAGES_BUCKET, StorageBackend, object_name_from_url

FEED_LIMIT = 200


def _feed_select(viewer_id: int) -> Select:
    # Aliased so they never auto-correlate with tables joined by the caller.
    like = aliased(Like)
    saved = aliased(SavedPost)
    likes_num = (
        select(func.count()).select_from(like).where(like.like_post_id == Post.id).scalar_subquery()
    )
    comments_num = (
        select(func.count()).select_from(Comment).where(Comment.post_id == Post.id).scalar_subquery()
    )
    is_liked = exists().where(like.like_post_id == Post.id, like.like_user_id == viewer_id)
    is_saved = exists().where(saved.saved_post_id == Post.id, saved.user_id == viewer_id)
    return select(
        Post.id,
        Post.user_id,
        Post.text_content,
        Post.image,
        Post.blurhash_string,
        Post.created_at,
        User.name,
        User.profile_picture,
        likes_num.label("likes_num"),
        comments_num.label("comments_num"),
        is_liked.label("is_liked"),
        is_saved.label("is_saved"),
    ).join(User, User.id == Post.user_id)


def _to_items(rows) -> list[PostFeedItem]:
    return [PostFeedItem.model_validate(row._mapping) for row in rows]


async def get_home_feed(db: AsyncSession, viewer_id: int) -> list[PostFeedItem]:
    """Posts by the viewer and by everyone the viewer follows, newest first."""
    followed = select(UserRelationship.is_followed_id).where(UserRelationship.is_following_id == viewer_id)
    q = (
        _feed_select(viewer_id)
        .where(or_(Post.user_id == viewer_id, Post.user_id.in_(followed)))
        .order_by(desc(Post.created_at), desc(Post.id))
        .limit(FEED_LIMIT)
    )
    result = await db.execute(q)
    return _to_items(result.all())


async def get_profile_feed(db: AsyncSession, viewer_id: int, author_id: int) -> list[PostFeedItem]:
    q = (
        _feed_select(viewer_id)
        .where(Post.user_id == author_id)
        .order_by(desc(Post.created_at), desc(Post.id))
        .limit(FEED_LIMIT)
    )
    result = await db.execute(q)
    return _to_items(result.all())


async def get_saved_feed(db: AsyncSession, viewer_id: int) -> list[PostFeedItem]:
    """Posts bookmarked by the viewer, in the order they were bookmarked."""
    q = (
        _feed_select(viewer_id)
        .join(SavedPost, SavedPost.saved_post_id == Post.id)
        .where(SavedPost.user_id == viewer_id)
        .order_by(SavedPost.created_at, Post.id)
        .limit(FEED_LIMIT)
    )
    result = await db.execute(q)
    return _to_items(result.all())


async def create_post(
    db: AsyncSession,
    storage: StorageBackend,
    user_id: int,
    text_content: str,
    image: UploadFile | None = None,
) -> Post:
    image_url, blurhash_string = None, None
    if image is not None:
        image_url, blurhash_string = await upload_image(storage, POST_IMAGES_BUCKET, image, with_blurhash=True)
    post = Post(
        user_id=user_id,
        text_content=text_content,
        image=image_url,
        blurhash_string=blurhash_string,
    )
    db.add(post)
    await db.flush()
    await db.refresh(post)
    return post


async def delete_post(
    db: AsyncSession,
    storage: StorageBackend,
    post_id: int,
    caller_id: int,
    admin_id: int | None,
) -> None:
    """Delete a post (owner or admin). The image goes first; if that fails the row stays."""
    result = await db.execute(select(Post.user_id, Post.image).where(Post.id == post_id).with_for_update())
    row = result.one_or_none()
    if row is None:
        raise NotFoundError("Post not found")
    ensure_owner_or_admin(row.user_id, caller_id, admin_id, "Only post owners or admins are allowed to delete posts")
    if row.image:
        await storage.remove(POST_IMAGES_BUCKET, [object_name_from_url(row.image)])
    await db.execute(delete(Post).where(Post.id == post_id))


async def save_post(db: AsyncSession, user_id: int, post_id: int) -> None:
    db.add(SavedPost(user_id=user_id, saved_post_id=post_id))
    try:
        await db.flush()
    except IntegrityError as exc:
        raise integrity_error_to_app_error(exc) from exc


async def unsave_post(db: AsyncSession, user_id: int, post_id: int) -> None:
    await db.execute(
        delete(SavedPost).where(SavedPost.user_id == user_id, SavedPost.saved_post_id == post_id)
    )
