"""
Shared FastAPI dependencies for v1 endpoints.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.error_responses import (
    ErrorMessages,
    raise_forbidden,
    raise_not_found,
)
from app.core.quiz_generation import QuizGenerator
from app.db.repository import QuizRepository, SqlAlchemyQuizRepository
from app.models import get_db, Exam, User


def get_quiz_repository(db: Session = Depends(get_db)) -> QuizRepository:
    """Repository for the current request's database session."""
    return SqlAlchemyQuizRepository(db)


def get_quiz_generator() -> QuizGenerator:
    """Quiz generator configured from settings. Overridden in tests."""
    return QuizGenerator()


def get_owned_exam(exam_id: str, repository: QuizRepository, teacher: User) -> Exam:
    """
    Load an exam and check that the teacher owns it.

    Raises:
        HTTPException: 404 if the exam doesn't exist, 403 if owned by someone else
    """
    exam = repository.get_exam(exam_id)
    if exam is None:
        raise_not_found(ErrorMessages.EXAM_NOT_FOUND)
    if exam.teacher_id != teacher.id:
        raise_forbidden(ErrorMessages.EXAM_ACCESS_DENIED)
    return exam
