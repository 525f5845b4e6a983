"""
Application configuration settings.
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Self


# Shortest secret accepted for signing tokens in production
_MIN_PRODUCTION_SECRET_LENGTH = 32


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "SmartExam API"
    APP_VERSION: str = "0.1.0"
    ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # API
    API_V1_PREFIX: str = "/v1"

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # Database
    DATABASE_URL: str = "sqlite:///./smartexam.db"

    # Security
    # IMPORTANT: JWT_SECRET_KEY MUST be set in .env file - no default for security
    JWT_SECRET_KEY: str = Field(..., description="JWT signing secret key (required)")
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 120

    # Quiz generation (Google Gemini)
    GEMINI_API_KEY: str = Field(
        default="",
        repr=False,
        description="Google Generative AI API key (leave empty to disable generation)",
    )
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_TEMPERATURE: float = Field(default=0.7, ge=0.0, le=2.0)
    GEMINI_MAX_OUTPUT_TOKENS: int = 8192
    # Source text beyond this many characters is not sent to the model
    QUIZ_MAX_SOURCE_CHARS: int = 30000
    QUIZ_MIN_QUESTIONS: int = 5

    # Exams
    ROOM_CODE_LENGTH: int = 6
    ROOM_CODE_MAX_ATTEMPTS: int = 10

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra fields from .env not defined in Settings
    )

    @model_validator(mode="after")
    def validate_room_code_length(self) -> Self:
        """Room codes shorter than 4 characters collide too often."""
        if self.ROOM_CODE_LENGTH < 4:
            raise ValueError(
                f"ROOM_CODE_LENGTH must be at least 4, got {self.ROOM_CODE_LENGTH}"
            )
        return self

    @model_validator(mode="after")
    def validate_production_secret(self) -> Self:
        """Validate JWT secret strength when running in production."""
        if (
            self.ENV == "production"
            and len(self.JWT_SECRET_KEY) < _MIN_PRODUCTION_SECRET_LENGTH
        ):
            raise ValueError(
                "JWT_SECRET_KEY must be at least "
                f"{_MIN_PRODUCTION_SECRET_LENGTH} characters in production"
            )
        return self


# mypy doesn't understand that pydantic_settings loads required fields from env vars
settings = Settings()  # type: ignore[call-arg]
