"""
Tests for Settings configuration validation in config.py.
"""
import pytest
from pydantic import ValidationError

# Test credentials for Settings instantiation
TEST_JWT_SECRET_KEY = "test-jwt-secret-key-for-unit-tests"  # pragma: allowlist secret
SHORT_JWT_SECRET_KEY = "short-secret"  # pragma: allowlist secret
STRONG_JWT_SECRET_KEY = "x" * 48  # pragma: allowlist secret


class TestDefaults:
    """Tests for default configuration values."""

    def test_quiz_defaults(self):
        """Test the quiz generation defaults."""
        from app.core.config import Settings

        settings = Settings(JWT_SECRET_KEY=TEST_JWT_SECRET_KEY)

        assert settings.QUIZ_MAX_SOURCE_CHARS == 30000
        assert settings.QUIZ_MIN_QUESTIONS == 5
        assert settings.GEMINI_MODEL == "gemini-2.5-flash"
        assert settings.API_V1_PREFIX == "/v1"

    def test_api_key_not_in_repr(self):
        """Test that the Gemini API key is hidden from repr output."""
        from app.core.config import Settings

        settings = Settings(
            JWT_SECRET_KEY=TEST_JWT_SECRET_KEY,
            GEMINI_API_KEY="very-secret-gemini-key",  # pragma: allowlist secret
        )

        assert "very-secret-gemini-key" not in repr(settings)


class TestRoomCodeLengthValidation:
    """Tests for ROOM_CODE_LENGTH validation."""

    def test_minimum_length_accepted(self):
        from app.core.config import Settings

        settings = Settings(JWT_SECRET_KEY=TEST_JWT_SECRET_KEY, ROOM_CODE_LENGTH=4)
        assert settings.ROOM_CODE_LENGTH == 4

    def test_short_length_rejected(self):
        """Test that room codes under 4 characters are rejected."""
        from app.core.config import Settings

        with pytest.raises(ValidationError) as exc_info:
            Settings(JWT_SECRET_KEY=TEST_JWT_SECRET_KEY, ROOM_CODE_LENGTH=3)
        assert "ROOM_CODE_LENGTH must be at least 4" in str(exc_info.value)


class TestGeminiTemperatureValidation:
    @pytest.mark.parametrize("temperature", [-0.1, 2.5])
    def test_out_of_range_rejected(self, temperature):
        from app.core.config import Settings

        with pytest.raises(ValidationError) as exc_info:
            Settings(
                JWT_SECRET_KEY=TEST_JWT_SECRET_KEY,
                GEMINI_TEMPERATURE=temperature,
            )
        errors = exc_info.value.errors()
        assert errors[0]["loc"] == ("GEMINI_TEMPERATURE",)


class TestProductionSecretValidation:
    """Tests for JWT secret strength in production."""

    def test_short_secret_allowed_in_development(self):
        from app.core.config import Settings

        settings = Settings(JWT_SECRET_KEY="short", ENV="development")
        assert settings.JWT_SECRET_KEY == "short"

    def test_short_secret_rejected_in_production(self):
        """Test that production refuses a weak signing secret."""
        from app.core.config import Settings

        with pytest.raises(ValidationError) as exc_info:
            Settings(JWT_SECRET_KEY=SHORT_JWT_SECRET_KEY, ENV="production")
        assert "at least 32 characters in production" in str(exc_info.value)

    def test_strong_secret_accepted_in_production(self):
        from app.core.config import Settings

        settings = Settings(JWT_SECRET_KEY=STRONG_JWT_SECRET_KEY, ENV="production")
        assert settings.ENV == "production"
