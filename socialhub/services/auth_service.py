"""Authentication business logic."""
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.core.errors import ConstraintError, integrity_error_to_app_error
from socialhub.core.security import get_password_hash, verify_password
from socialhub.models.user import User
from socialhub.schemas.user import UserCreate


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def get_user_by_id(db: AsyncSession, user_id: int) -> User | None:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def create_user(db: AsyncSession, data: UserCreate, role: str = "user") -> User:
    if await get_user_by_email(db, data.email):
        raise ConstraintError(f"User {data.email} is already registered.")
    user = User(
        email=data.email,
        username=data.username,
        name=data.name,
        password_hash=get_password_hash(data.password),
        role=role,
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError as exc:
        raise integrity_error_to_app_error(exc) from exc
    await db.refresh(user)
    return user


async def authenticate_user(db: AsyncSession, email: str, password: str) -> User | None:
    user = await get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user
