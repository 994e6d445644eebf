"""API dependencies: cookie auth, db session, storage, admin identity."""
from fastapi import Depends, Request
from fastapi.security import APIKeyCookie
from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.core.config import settings
from socialhub.core.errors import AuthError
from socialhub.core.security import verify_token
from socialhub.db.session import get_db, get_session_maker  # noqa: F401
from socialhub.models.user import User
from socialhub.services.auth_service import get_user_by_id
from socialhub.services.storage_service import get_storage  # noqa: F401
from socialhub.services.user_service import get_admin_id as lookup_admin_id

session_cookie = APIKeyCookie(name=settings.JWT_COOKIE_NAME, auto_error=False)


async def get_current_user_id(token: str | None = Depends(session_cookie)) -> int:
    """Identity of the caller, taken from the session cookie alone."""
    if not token:
        raise AuthError()
    return verify_token(token)


async def get_current_user(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> User:
    user = await get_user_by_id(db, user_id)
    if user is None:
        # Token outlived its account
        raise AuthError()
    return user


async def get_admin_id(request: Request, db: AsyncSession = Depends(get_db)) -> int | None:
    """Admin account id, looked up by ADMIN_EMAIL and cached once found."""
    cached = getattr(request.app.state, "admin_id", None)
    if cached is not None:
        return cached
    admin_id = await lookup_admin_id(db)
    if admin_id is not None:
        request.app.state.admin_id = admin_id
    return admin_id


def forget_admin_id(request: Request) -> None:
    """Drop the cached admin id; the next lookup resolves ADMIN_EMAIL again."""
    request.app.state.admin_id = None
