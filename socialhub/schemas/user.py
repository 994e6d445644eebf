"""Pydantic schemas for User."""
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from socialhub.models.user import VISIBILITY_INVISIBLE, VISIBILITY_ONLINE


def _normalize_username(value: str) -> str:
    if any(ch.isspace() for ch in value.strip()):
        raise ValueError("No whitespaces are allowed")
    return value.strip().lower()


class UserCreate(BaseModel):
    email: EmailStr
    username: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=8)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("username")
    @classmethod
    def normalize_username(cls, v: str) -> str:
        return _normalize_username(v)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name cannot be blank")
        return v.strip()


class UserUpdate(BaseModel):
    """Profile fields sent as multipart form data alongside optional pictures."""

    name: str = Field(..., min_length=1, max_length=100)
    username: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    country: str | None = None
    status_text: str | None = None
    languages: str | None = None

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("username")
    @classmethod
    def normalize_username(cls, v: str) -> str:
        return _normalize_username(v)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name cannot be blank")
        return v.strip()


class UserResponse(BaseModel):
    id: int
    email: str
    username: str
    name: str
    role: str = "user"
    profile_picture: str | None = None
    bg_picture: str | None = None
    country: str | None = None
    status_text: str | None = None
    languages: str | None = None
    visibility: str = VISIBILITY_ONLINE
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class UserSummary(BaseModel):
    """Compact user row used by suggestions, online friends and search."""

    id: int
    name: str
    profile_picture: str | None = None
    username: str | None = None

    model_config = {"from_attributes": True}


class FollowedUser(UserSummary):
    role: str = "user"
    status_text: str | None = None
    visibility: str = VISIBILITY_ONLINE


class VisibilityUpdate(BaseModel):
    visibility: str = Field(..., pattern=f"^({VISIBILITY_ONLINE}|{VISIBILITY_INVISIBLE})$")


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class LoginResponse(BaseModel):
    status: str = "success"
    token: str
    data: UserResponse


class RegisterResponse(BaseModel):
    message: str
    created_user_id: int
