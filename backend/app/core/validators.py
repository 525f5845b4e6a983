"""
Input validation and sanitization utilities for request schemas.
"""

import re


class StringSanitizer:
    """
    String sanitization for user-supplied display text (names, exam titles).
    """

    # Control characters to strip (except newlines, tabs, carriage returns)
    CONTROL_CHARS_PATTERN = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")

    @classmethod
    def _base_sanitize(cls, value: str) -> str:
        """Strip control characters and surrounding whitespace."""
        value = cls.CONTROL_CHARS_PATTERN.sub("", value)
        return value.strip()

    @classmethod
    def sanitize_title(cls, title: str) -> str:
        """Sanitize an exam title; collapses runs of whitespace."""
        title = cls._base_sanitize(title)
        return re.sub(r"\s+", " ", title)

    @classmethod
    def sanitize_name(cls, name: str) -> str:
        """
        Sanitize a person's display name.

        Allows letters, digits, spaces, hyphens, periods and apostrophes.
        """
        name = cls._base_sanitize(name)
        name = re.sub(r"[^\w\s\-'.]", "", name)
        return re.sub(r"\s+", " ", name).strip()

    @classmethod
    def sanitize_content(cls, content: str) -> str:
        """Sanitize quiz source text. Newlines are kept."""
        return cls._base_sanitize(content)


class EmailValidator:
    """
    Email normalization utilities.
    """

    @classmethod
    def normalize_email(cls, email: str) -> str:
        """Lowercase and remove whitespace so lookups are consistent."""
        return email.lower().strip().replace(" ", "")


class RoomCodeValidator:
    """Room code normalization."""

    @classmethod
    def normalize(cls, code: str) -> str:
        """
        Upper-case and strip a room code.

        Codes are not checked for shape here; an unknown or malformed code
        simply matches no exam.
        """
        return code.strip().upper()
