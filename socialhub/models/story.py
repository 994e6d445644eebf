"""Story model. Stories are ephemeral by convention only; nothing expires them."""
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from socialhub.db.session import Base


class Story(Base):
    __tablename__ = "stories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    story_user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    image_url = Column(Text, nullable=True)
    blurhash_string = Column(String(100), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
