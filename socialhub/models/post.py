"""Post model."""
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from socialhub.db.session import Base


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    text_content = Column(Text, nullable=False)
    image = Column(Text, nullable=True)
    blurhash_string = Column(String(100), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
