"""Engagement models: likes, bookmarks and follow edges.

Each one is keyed by the pair it links, so a duplicate insert is rejected by
the primary key.
"""
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer

from socialhub.db.session import Base


class Like(Base):
    __tablename__ = "likes"

    like_user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    like_post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class SavedPost(Base):
    __tablename__ = "saved_posts"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    saved_post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class UserRelationship(Base):
    """Directed follow edge: ``is_following_id`` follows ``is_followed_id``."""

    __tablename__ = "user_relationships"

    is_following_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    is_followed_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
