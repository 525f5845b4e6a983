"""
Standardized error response messages and builders.

All user-facing error messages live in ErrorMessages so endpoints stay
consistent. Raise them through the raise_* helpers:

    from app.core.error_responses import ErrorMessages, raise_not_found

    if exam is None:
        raise_not_found(ErrorMessages.EXAM_NOT_FOUND)

Messages use sentence case and end with a period.
"""

from typing import NoReturn, Optional

from fastapi import HTTPException, status


class ErrorMessages:
    """Centralized error message constants and templates."""

    # ==========================================================================
    # Authentication Errors (401)
    # ==========================================================================
    INVALID_TOKEN = "Invalid authentication token."
    INVALID_TOKEN_TYPE = "Invalid token type."
    INVALID_TOKEN_PAYLOAD = "Invalid token payload."
    USER_NOT_FOUND_AUTH = "User not found."

    # ==========================================================================
    # Authorization Errors (403)
    # ==========================================================================
    TEACHER_ONLY = "Only teachers can perform this action."
    STUDENT_ONLY = "Only students can perform this action."
    EXAM_ACCESS_DENIED = "Not authorized to access this exam."

    # ==========================================================================
    # Not Found Errors (404)
    # ==========================================================================
    USER_NOT_REGISTERED = "User not found. Please register."
    EXAM_NOT_FOUND = "Exam not found."
    INVALID_ROOM_CODE = "Invalid room code."

    # ==========================================================================
    # Conflict Errors (409)
    # ==========================================================================
    EMAIL_ALREADY_REGISTERED = "Email already registered."
    EXAM_CLOSED = "This exam is closed."
    ALREADY_SUBMITTED = "You have already submitted this exam."

    # ==========================================================================
    # Unprocessable Errors (422)
    # ==========================================================================
    NO_QUESTIONS_GENERATED = "AI returned no questions. Try different content."

    # ==========================================================================
    # Upstream / Server Errors (5xx)
    # ==========================================================================
    ROOM_CODE_EXHAUSTED = "Could not allocate a room code. Please try again later."
    INTERNAL_ERROR = "An unexpected error occurred. Please try again later."

    # ==========================================================================
    # Template Methods for Dynamic Messages
    # ==========================================================================
    @staticmethod
    def answer_count_mismatch(expected: int, received: int) -> str:
        """Message when the submitted answer list doesn't match the exam."""
        return (
            f"Expected {expected} answers but received {received}. "
            "Submit one answer per question (-1 for unanswered)."
        )

    @staticmethod
    def invalid_answer_index(question_number: int, answer: int) -> str:
        """Message when an answer index points outside a question's options."""
        return f"Answer {answer} is not a valid option for question {question_number}."


# ==============================================================================
# HTTPException Builder Functions
# ==============================================================================


def raise_bad_request(detail: str) -> NoReturn:
    """Raise a 400 Bad Request exception."""
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=detail,
    )


def raise_unauthorized(
    detail: str,
    include_www_authenticate: bool = True,
) -> NoReturn:
    """Raise a 401 Unauthorized exception.

    Args:
        detail: User-facing error message
        include_www_authenticate: Whether to include WWW-Authenticate header
    """
    headers = {"WWW-Authenticate": "Bearer"} if include_www_authenticate else None
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers=headers,
    )


def raise_forbidden(detail: str) -> NoReturn:
    """Raise a 403 Forbidden exception.

    Use for authorization failures (valid credentials but insufficient permissions).
    """
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail=detail,
    )


def raise_not_found(detail: str) -> NoReturn:
    """Raise a 404 Not Found exception."""
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=detail,
    )


def raise_conflict(detail: str) -> NoReturn:
    """Raise a 409 Conflict exception.

    Use when the request conflicts with current state (e.g., duplicate creation).
    """
    raise HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=detail,
    )


def raise_unprocessable(detail: str) -> NoReturn:
    """Raise a 422 Unprocessable Entity exception."""
    raise HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=detail,
    )


def raise_bad_gateway(detail: str) -> NoReturn:
    """Raise a 502 Bad Gateway exception.

    Use when an upstream service (e.g., the quiz generation model) fails.
    """
    raise HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=detail,
    )


def raise_server_error(
    detail: str,
    error_id: Optional[str] = None,
) -> NoReturn:
    """Raise a 500 Internal Server Error exception.

    Args:
        detail: User-facing error message (should be generic and friendly)
        error_id: Optional error tracking ID to include in response
    """
    if error_id:
        detail = f"{detail} (Error ID: {error_id})"

    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=detail,
    )
