"""User model."""
from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, Text

from socialhub.db.session import Base

VISIBILITY_ONLINE = "online"
VISIBILITY_INVISIBLE = "invisible"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(30), nullable=False, default="user")
    profile_picture = Column(Text, nullable=True)
    bg_picture = Column(Text, nullable=True)
    country = Column(String(100), nullable=True)
    status_text = Column(Text, nullable=True)
    languages = Column(Text, nullable=True)
    visibility = Column(String(20), nullable=False, default=VISIBILITY_ONLINE)  # online | invisible
    created_at = Column(DateTime, default=datetime.utcnow)
