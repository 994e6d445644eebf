"""Security utilities: password hashing and JWT token handling."""
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from socialhub.core.config import settings
from socialhub.core.errors import AuthError, AuthorizationError, ServerError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=11)


class TokenPayload(BaseModel):
    sub: int
    exp: int
    type: str


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def _secret() -> str:
    if not settings.JWT_SECRET_KEY:
        raise ServerError("JWT_SECRET_KEY is not configured")
    return settings.JWT_SECRET_KEY


def create_access_token(subject: int, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = {"sub": str(subject), "exp": expire, "type": "access"}
    return jwt.encode(to_encode, _secret(), algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str | None) -> int:
    """Return the user id carried by ``token`` or raise ``AuthError``."""
    secret = _secret()
    if not token:
        raise AuthError()
    try:
        payload = TokenPayload.model_validate(
            jwt.decode(token, secret, algorithms=[settings.JWT_ALGORITHM])
        )
    except (JWTError, PydanticValidationError) as exc:
        raise AuthError() from exc
    if payload.type != "access":
        raise AuthError()
    return payload.sub


def is_owner_or_admin(owner_id: int, caller_id: int, admin_id: int | None) -> bool:
    return caller_id == owner_id or (admin_id is not None and caller_id == admin_id)


def ensure_owner_or_admin(owner_id: int, caller_id: int, admin_id: int | None, message: str) -> None:
    if not is_owner_or_admin(owner_id, caller_id, admin_id):
        raise AuthorizationError(message)
