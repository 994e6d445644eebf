"""SQLAlchemy declarative base and model imports for Alembic."""
from socialhub.db.session import Base  # noqa: F401
from socialhub.models.user import User  # noqa: F401
from socialhub.models.post import Post  # noqa: F401
from socialhub.models.comment import Comment  # noqa: F401
from socialhub.models.engagement import Like, SavedPost, UserRelationship  # noqa: F401
from socialhub.models.story import Story  # noqa: F401

__all__ = ["Base", "User", "Post", "Comment", "Like", "SavedPost", "UserRelationship", "Story"]
