"""
Authentication endpoints for user registration and login.
"""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.analytics import AnalyticsTracker
from app.core.auth import get_current_user
from app.core.error_responses import ErrorMessages, raise_conflict, raise_not_found
from app.core.security import create_access_token
from app.models import get_db, User
from app.schemas.auth import Token, UserLogin, UserRegister, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _token_response(user: User) -> dict:
    access_token = create_access_token({"user_id": user.id, "role": user.role.value})
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user": user,
    }


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register_user(user_data: UserRegister, db: Session = Depends(get_db)):
    """
    Register a new teacher or student account and sign it in.

    Raises:
        HTTPException: 409 if email already exists
    """
    existing_user = db.scalars(
        select(User).where(User.email == user_data.email)
    ).first()
    if existing_user:
        raise_conflict(ErrorMessages.EMAIL_ALREADY_REGISTERED)

    new_user = User(
        name=user_data.name,
        email=user_data.email,
        role=user_data.role,
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    AnalyticsTracker.track_user_registered(
        user_id=new_user.id, role=new_user.role.value
    )

    return _token_response(new_user)


@router.post("/login", response_model=Token)
def login_user(credentials: UserLogin, db: Session = Depends(get_db)):
    """
    Sign in by email.

    Raises:
        HTTPException: 404 if no account uses this email
    """
    user = db.scalars(select(User).where(User.email == credentials.email)).first()
    if user is None:
        raise_not_found(ErrorMessages.USER_NOT_REGISTERED)

    AnalyticsTracker.track_user_login(user_id=user.id)

    return _token_response(user)


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    """Return the authenticated user's profile."""
    return current_user
