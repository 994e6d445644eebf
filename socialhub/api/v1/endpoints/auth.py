"""Auth endpoints: register, login, logout."""
import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.api.deps import get_current_user, get_db
from socialhub.core.config import settings
from socialhub.core.errors import AuthError, clear_session_cookie
from socialhub.core.security import create_access_token
from socialhub.models.user import User
from socialhub.schemas.common import StatusResponse
from socialhub.schemas.user import LoginRequest, LoginResponse, RegisterResponse, UserCreate, UserResponse
from socialhub.services.auth_service import authenticate_user, create_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        settings.JWT_COOKIE_NAME,
        token,
        max_age=settings.JWT_COOKIE_EXPIRES_IN_DAYS * 24 * 60 * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: UserCreate,
    db: AsyncSession = Depends(get_db),
):
    logger.info("Register attempt: %s %s", data.username, data.email)
    user = await create_user(db, data)
    await db.commit()
    logger.info("Register success: %s %s", user.id, user.username)
    return RegisterResponse(message="User created successfully", created_user_id=user.id)


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    logger.info("Login attempt: %s", data.email)
    user = await authenticate_user(db, data.email, data.password)
    if not user:
        logger.info("Login failed: invalid email or password")
        raise AuthError("Wrong email or password")
    token = create_access_token(user.id)
    _set_session_cookie(response, token)
    logger.info("Login success: %s %s", user.id, user.username)
    return LoginResponse(token=token, data=UserResponse.model_validate(user))


@router.post("/logout", response_model=StatusResponse)
async def logout(response: Response):
    clear_session_cookie(response)
    return StatusResponse()


@router.get("/me", response_model=UserResponse)
async def me(current_user: User = Depends(get_current_user)):
    return UserResponse.model_validate(current_user)
