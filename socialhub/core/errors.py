"""Error taxonomy and translation of errors into HTTP responses.

Every failure inside a request ends up here. ``AppError`` subclasses carry a
status code and an ``is_operational`` flag; operational errors are expected,
user-facing conditions whose message is safe to show in production. Anything
else collapses to a generic 500 outside development mode.
"""
import traceback

from fastapi.responses import JSONResponse, Response
from sqlalchemy.exc import IntegrityError

from socialhub.core.config import settings

AUTH_ERROR_MARKER = "jwt_error"
GENERIC_ERROR_MESSAGE = "Something went wrong"

_UNIQUE_VIOLATION = "23505"
_FOREIGN_KEY_VIOLATION = "23503"


class AppError(Exception):
    status_code: int = 500
    is_operational: bool = True

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    @property
    def status(self) -> str:
        return "fail" if 400 <= self.status_code < 500 else "error"


class ValidationError(AppError):
    status_code = 400


class AuthError(AppError):
    """Missing, malformed or expired session token."""

    status_code = 401

    def __init__(self, message: str = AUTH_ERROR_MARKER):
        super().__init__(message)


class AuthorizationError(AppError):
    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConstraintError(AppError):
    status_code = 409


class StorageError(AppError):
    status_code = 500


class ServerError(AppError):
    status_code = 500
    is_operational = False


def integrity_error_to_app_error(exc: IntegrityError) -> AppError:
    """Map a database integrity failure to a unique or foreign-key error."""
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    text = str(orig).lower()
    if code == _FOREIGN_KEY_VIOLATION or "foreign key" in text:
        return NotFoundError("Referenced resource does not exist")
    if code == _UNIQUE_VIOLATION or "unique" in text or "duplicate" in text:
        return ConstraintError("Resource already exists")
    return ServerError(str(orig))


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        settings.JWT_COOKIE_NAME,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


def render_error(exc: Exception, debug: bool) -> JSONResponse:
    """Build the client-facing response for ``exc``.

    Auth failures are handled before the mode branch: the cookie is always
    cleared and the body is always the bare marker.
    """
    if isinstance(exc, AuthError):
        response = JSONResponse(status_code=401, content={"message": AUTH_ERROR_MARKER})
        clear_session_cookie(response)
        return response

    if isinstance(exc, IntegrityError):
        exc = integrity_error_to_app_error(exc)

    app_error = exc if isinstance(exc, AppError) else None
    status_code = app_error.status_code if app_error else 500
    status = app_error.status if app_error else "error"

    if debug:
        return JSONResponse(
            status_code=status_code,
            content={
                "status": status,
                "statusCode": status_code,
                "message": app_error.message if app_error else str(exc),
                "error": {"type": type(exc).__name__},
                "stack": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
            },
        )

    if app_error and app_error.is_operational:
        return JSONResponse(
            status_code=status_code,
            content={"status": status, "statusCode": status_code, "message": app_error.message},
        )
    return JSONResponse(
        status_code=500,
        content={"status": "error", "message": GENERIC_ERROR_MESSAGE},
    )
