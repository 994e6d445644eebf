"""Comment business logic."""
from sqlalchemy import delete, desc, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.core.errors import AuthorizationError, NotFoundError, integrity_error_to_app_error
from socialhub.models.comment import Comment
from socialhub.models.user import User
from socialhub.schemas.comment import CommentCreate, CommentResponse

COMMENTS_LIMIT = 10


async def list_comments(db: AsyncSession, post_id: int) -> list[CommentResponse]:
    """Latest comments of a post with their authors."""
    result = await db.execute(
        select(
            Comment.id,
            Comment.text_content,
            Comment.comment_user_id,
            Comment.post_id,
            Comment.created_at,
            User.name,
            User.profile_picture,
        )
        .join(User, User.id == Comment.comment_user_id)
        .where(Comment.post_id == post_id)
        .order_by(desc(Comment.created_at), desc(Comment.id))
        .limit(COMMENTS_LIMIT)
    )
    return [CommentResponse.model_validate(row._mapping) for row in result.all()]


async def create_comment(db: AsyncSession, user_id: int, data: CommentCreate) -> Comment:
    comment = Comment(text_content=data.text_content, comment_user_id=user_id, post_id=data.post_id)
    db.add(comment)
    try:
        await db.flush()
    except IntegrityError as exc:
        raise integrity_error_to_app_error(exc) from exc
    return comment


async def delete_comment(db: AsyncSession, comment_id: int, caller_id: int, admin_id: int | None) -> None:
    """Delete in one statement that only matches when the caller owns the comment or is admin."""
    stmt = delete(Comment).where(Comment.id == comment_id)
    if caller_id != admin_id:
        stmt = stmt.where(Comment.comment_user_id == caller_id)
    result = await db.execute(stmt)
    if result.rowcount:
        return
    found = await db.execute(select(Comment.id).where(Comment.id == comment_id))
    if found.scalar_one_or_none() is None:
        raise NotFoundError("Comment not found")
    raise AuthorizationError("Only comment owners or admins are allowed to delete comments")
