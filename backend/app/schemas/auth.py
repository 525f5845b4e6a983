"""
Pydantic schemas for authentication endpoints.
"""
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.core.validators import EmailValidator, StringSanitizer, TextValidator
from app.models.models import UserRole


class UserRegister(BaseModel):
    """Schema for user registration request."""

    name: str = Field(..., min_length=1, max_length=200, description="Display name")
    email: EmailStr = Field(..., description="User email address")
    role: UserRole = Field(..., description="TEACHER or STUDENT")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Validate and normalize email."""
        return EmailValidator.normalize_email(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Sanitize name and reject names that sanitize to nothing."""
        return TextValidator.validate_non_empty_text(
            StringSanitizer.sanitize_name(v), "Name"
        )


class UserLogin(BaseModel):
    """Schema for user login request. Users sign in by email only."""

    email: EmailStr = Field(..., description="User email address")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Normalize email."""
        return EmailValidator.normalize_email(v)


class UserResponse(BaseModel):
    """Schema for user information in responses."""

    id: str = Field(..., description="User ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="User email address")
    role: UserRole = Field(..., description="TEACHER or STUDENT")
    created_at: datetime = Field(..., description="Account creation timestamp")

    class Config:
        """Pydantic configuration."""

        from_attributes = True


class Token(BaseModel):
    """Schema for authentication token response."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    user: UserResponse = Field(..., description="Authenticated user")
