"""
FastAPI authentication dependencies.
"""
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.models import get_db, User, UserRole
from .security import ACCESS_TOKEN_TYPE, decode_token
from .error_responses import ErrorMessages, raise_forbidden, raise_unauthorized

# HTTP Bearer token scheme
security = HTTPBearer()


def _decode_and_validate_token(token: str) -> str:
    """
    Decode and validate an access token, returning the user_id.

    Raises:
        HTTPException: 401 if token is invalid, wrong type, or missing user_id
    """
    payload = decode_token(token)
    if payload is None:
        raise_unauthorized(ErrorMessages.INVALID_TOKEN)

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        raise_unauthorized(ErrorMessages.INVALID_TOKEN_TYPE)

    user_id = payload.get("user_id")
    if user_id is None:
        raise_unauthorized(ErrorMessages.INVALID_TOKEN_PAYLOAD)

    return user_id


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """
    Get the current authenticated user from JWT token.

    Raises:
        HTTPException: 401 if token is invalid or user not found
    """
    user_id = _decode_and_validate_token(credentials.credentials)
    user = db.get(User, user_id)
    if user is None:
        raise_unauthorized(ErrorMessages.USER_NOT_FOUND_AUTH)
    return user


def get_current_teacher(current_user: User = Depends(get_current_user)) -> User:
    """Require the authenticated user to be a teacher (403 otherwise)."""
    if current_user.role != UserRole.TEACHER:
        raise_forbidden(ErrorMessages.TEACHER_ONLY)
    return current_user


def get_current_student(current_user: User = Depends(get_current_user)) -> User:
    """Require the authenticated user to be a student (403 otherwise)."""
    if current_user.role != UserRole.STUDENT:
        raise_forbidden(ErrorMessages.STUDENT_ONLY)
    return current_user
