"""
Database models for the SmartExam application.
"""
import enum
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import (
    JSON,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    CheckConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.datetime_utils import utc_now
from .base import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class UserRole(str, enum.Enum):
    """User role enumeration."""

    TEACHER = "TEACHER"
    STUDENT = "STUDENT"


class ExamStatus(str, enum.Enum):
    """Exam status enumeration. Students can only join OPEN exams."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"


class User(Base):
    """User model. Users sign in by email only."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True
    )
    role: Mapped[UserRole] = mapped_column(Enum(UserRole), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )

    exams: Mapped[List["Exam"]] = relationship(
        back_populates="teacher", cascade="all, delete-orphan"
    )


class Exam(Base):
    """
    An exam created by a teacher from AI-generated questions.

    ``questions`` holds a JSON list of
    ``{"id", "text", "options", "correct_answer_index"}`` objects.
    """

    __tablename__ = "exams"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    teacher_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    room_code: Mapped[str] = mapped_column(
        String(16), unique=True, nullable=False, index=True
    )
    questions: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False)
    status: Mapped[ExamStatus] = mapped_column(
        Enum(ExamStatus), default=ExamStatus.OPEN, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )

    teacher: Mapped[User] = relationship(back_populates="exams")
    results: Mapped[List["ExamResult"]] = relationship(
        back_populates="exam", cascade="all, delete-orphan"
    )

    @property
    def question_count(self) -> int:
        return len(self.questions or [])


class ExamResult(Base):
    """A student's submitted exam. At most one per student per exam."""

    __tablename__ = "exam_results"
    __table_args__ = (
        UniqueConstraint("exam_id", "student_id", name="uq_exam_result_student"),
        CheckConstraint(
            "score >= 0 AND score <= total_questions", name="ck_score_in_range"
        ),
        Index("ix_exam_results_exam_score", "exam_id", "score"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    exam_id: Mapped[str] = mapped_column(
        ForeignKey("exams.id", ondelete="CASCADE"), nullable=False, index=True
    )
    student_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Denormalized so leaderboards and exports need no join
    student_name: Mapped[str] = mapped_column(String(200), nullable=False)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    total_questions: Mapped[int] = mapped_column(Integer, nullable=False)
    answers: Mapped[List[int]] = mapped_column(JSON, nullable=False)
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )

    exam: Mapped[Exam] = relationship(back_populates="results")
    student: Mapped[Optional[User]] = relationship()

    @property
    def percentage(self) -> float:
        return (self.score / self.total_questions) * 100
