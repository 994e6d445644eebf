"""User profile endpoints."""
from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.api.deps import (
    forget_admin_id,
    get_admin_id,
    get_current_user,
    get_current_user_id,
    get_db,
    get_storage,
)
from socialhub.core.errors import AuthorizationError, NotFoundError, ValidationError, clear_session_cookie
from socialhub.models.user import User
from socialhub.schemas.common import MessageResponse, StatusResponse
from socialhub.schemas.password import ChangePasswordRequest, PasswordCheckRequest
from socialhub.schemas.user import UserResponse, UserSummary, UserUpdate, VisibilityUpdate
from socialhub.services import user_service
from socialhub.services.auth_service import get_user_by_id
from socialhub.services.storage_service import StorageBackend

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/suggested", response_model=list[UserSummary])
async def suggested_users(
    current_user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await user_service.get_suggested_users(db, current_user_id)


@router.get("/online", response_model=list[UserSummary])
async def online_friends(
    current_user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await user_service.get_online_friends(db, current_user_id)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    current_user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    user = await get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("No user found with given id")
    return UserResponse.model_validate(user)


@router.patch("", response_model=StatusResponse)
async def update_me(
    request: Request,
    name: str = Form(""),
    username: str = Form(""),
    email: str = Form(""),
    country: str | None = Form(None),
    status_text: str | None = Form(None),
    languages: str | None = Form(None),
    profile_picture: UploadFile | None = File(None),
    bg_picture: UploadFile | None = File(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    storage: StorageBackend = Depends(get_storage),
):
    try:
        data = UserUpdate(
            name=name,
            username=username,
            email=email,
            country=country,
            status_text=status_text,
            languages=languages,
        )
    except PydanticValidationError as exc:
        raise ValidationError("Some required fields are missing or invalid") from exc
    profile_picture = profile_picture if profile_picture and profile_picture.filename else None
    bg_picture = bg_picture if bg_picture and bg_picture.filename else None
    old_email = current_user.email
    await user_service.update_profile(db, storage, current_user, data, profile_picture, bg_picture)
    await db.commit()
    if data.email != old_email:
        # The admin is whoever holds ADMIN_EMAIL
        forget_admin_id(request)
    return StatusResponse()


@router.patch("/password-update", response_model=MessageResponse)
async def change_password(
    data: ChangePasswordRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await user_service.change_password(db, current_user, data.old_password, data.new_password)
    await db.commit()
    return MessageResponse(message="Password changed!")


@router.post("/password-check", response_model=MessageResponse)
async def check_password(
    data: PasswordCheckRequest,
    current_user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Re-verify the caller's password before a sensitive action."""
    if not await user_service.check_password(db, current_user_id, data.password):
        raise AuthorizationError("Incorrect or missing password", status_code=401)
    return MessageResponse(message="Password is correct")


@router.patch("/{user_id}/status", response_model=StatusResponse)
async def update_visibility(
    user_id: int,
    data: VisibilityUpdate,
    current_user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await user_service.set_visibility(db, user_id, current_user_id, data.visibility)
    await db.commit()
    return StatusResponse()


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_account(
    user_id: int,
    request: Request,
    response: Response,
    current_user_id: int = Depends(get_current_user_id),
    admin_id: int | None = Depends(get_admin_id),
    db: AsyncSession = Depends(get_db),
    storage: StorageBackend = Depends(get_storage),
):
    await user_service.delete_user(db, storage, user_id, current_user_id, admin_id)
    await db.commit()
    if user_id == admin_id:
        forget_admin_id(request)
    if user_id == current_user_id:
        clear_session_cookie(response)
    return MessageResponse(message="Account deleted successfully")

