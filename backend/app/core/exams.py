"""
Exam lifecycle helpers: room codes, grading and student-facing views.
"""
import logging
import secrets
import string
from typing import Any, Dict, List, Sequence

from app.core.config import settings
from app.db.repository import QuizRepository

logger = logging.getLogger(__name__)

ROOM_CODE_ALPHABET = string.ascii_uppercase + string.digits

# Sentinel answer index for a question the student skipped
UNANSWERED = -1


class RoomCodeAllocationError(RuntimeError):
    """Raised when no unused room code was found within ROOM_CODE_MAX_ATTEMPTS tries."""


def generate_room_code(length: int = 6) -> str:
    """Generate a random upper-case alphanumeric room code."""
    return "".join(secrets.choice(ROOM_CODE_ALPHABET) for _ in range(length))


def allocate_room_code(repository: QuizRepository) -> str:
    """
    Generate a room code not used by any existing exam.

    Raises:
        RoomCodeAllocationError: If every attempt collided
    """
    for attempt in range(settings.ROOM_CODE_MAX_ATTEMPTS):
        code = generate_room_code(settings.ROOM_CODE_LENGTH)
        if not repository.room_code_exists(code):
            return code
        logger.debug(f"Room code collision on attempt {attempt + 1}: {code}")
    raise RoomCodeAllocationError(
        f"No free room code after {settings.ROOM_CODE_MAX_ATTEMPTS} attempts"
    )


def grade_answers(questions: Sequence[Dict[str, Any]], answers: Sequence[int]) -> int:
    """
    Count the answers that match each question's correct option.

    ``answers[i]`` is the selected option index for ``questions[i]``;
    UNANSWERED never matches.
    """
    return sum(
        1
        for question, answer in zip(questions, answers)
        if answer != UNANSWERED and answer == question["correct_answer_index"]
    )


def questions_for_student(questions: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Copy of the questions with the correct answers removed."""
    return [
        {key: value for key, value in q.items() if key != "correct_answer_index"}
        for q in questions
    ]
