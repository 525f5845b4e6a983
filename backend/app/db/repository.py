"""
Persistence for exams and exam results.

Endpoints depend on the QuizRepository protocol rather than on SQLAlchemy
queries directly, so the statistics and results views can be exercised with
any store that can list submissions for an exam and exams for a teacher.
"""
import logging
from typing import List, Optional, Protocol, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.models import Exam, ExamResult, ExamStatus

logger = logging.getLogger(__name__)

UNKNOWN_EXAM_TITLE = "Unknown Exam"


class QuizRepository(Protocol):
    """Storage operations used by the exam and results endpoints."""

    def get_exam(self, exam_id: str) -> Optional[Exam]:
        ...

    def get_exam_by_room_code(self, room_code: str) -> Optional[Exam]:
        ...

    def list_exams_for_teacher(self, teacher_id: str) -> List[Exam]:
        ...

    def room_code_exists(self, room_code: str) -> bool:
        ...

    def save_exam(self, exam: Exam) -> Exam:
        ...

    def update_exam_status(self, exam_id: str, status: ExamStatus) -> Optional[Exam]:
        ...

    def list_results_for_exam(self, exam_id: str) -> List[ExamResult]:
        ...

    def get_result_for_student(
        self, exam_id: str, student_id: str
    ) -> Optional[ExamResult]:
        ...

    def save_result(self, result: ExamResult) -> Optional[ExamResult]:
        ...

    def list_results_for_student(
        self, student_id: str
    ) -> List[Tuple[ExamResult, str]]:
        ...


class SqlAlchemyQuizRepository:
    """QuizRepository backed by a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def get_exam(self, exam_id: str) -> Optional[Exam]:
        return self.db.get(Exam, exam_id)

    def get_exam_by_room_code(self, room_code: str) -> Optional[Exam]:
        """Find an exam by room code. Codes are matched case-insensitively."""
        stmt = select(Exam).where(Exam.room_code == room_code.strip().upper())
        return self.db.scalars(stmt).first()

    def list_exams_for_teacher(self, teacher_id: str) -> List[Exam]:
        """Exams created by a teacher, newest first."""
        stmt = (
            select(Exam)
            .where(Exam.teacher_id == teacher_id)
            .order_by(Exam.created_at.desc())
        )
        return list(self.db.scalars(stmt).all())

    def room_code_exists(self, room_code: str) -> bool:
        stmt = select(Exam.id).where(Exam.room_code == room_code)
        return self.db.scalars(stmt).first() is not None

    def save_exam(self, exam: Exam) -> Exam:
        self.db.add(exam)
        self.db.commit()
        self.db.refresh(exam)
        logger.info(f"Saved exam {exam.id} with room code {exam.room_code}")
        return exam

    def update_exam_status(self, exam_id: str, status: ExamStatus) -> Optional[Exam]:
        """
        Open or close an exam.

        Returns:
            The updated exam, or None if no exam has that ID
        """
        exam = self.get_exam(exam_id)
        if exam is None:
            return None
        exam.status = status
        self.db.commit()
        self.db.refresh(exam)
        return exam

    def list_results_for_exam(self, exam_id: str) -> List[ExamResult]:
        """Results of an exam in leaderboard order (highest score first)."""
        stmt = (
            select(ExamResult)
            .where(ExamResult.exam_id == exam_id)
            .order_by(ExamResult.score.desc(), ExamResult.submitted_at.asc())
        )
        return list(self.db.scalars(stmt).all())

    def get_result_for_student(
        self, exam_id: str, student_id: str
    ) -> Optional[ExamResult]:
        stmt = select(ExamResult).where(
            ExamResult.exam_id == exam_id,
            ExamResult.student_id == student_id,
        )
        return self.db.scalars(stmt).first()

    def save_result(self, result: ExamResult) -> Optional[ExamResult]:
        """
        Store a submission unless the student already submitted this exam.

        Returns:
            The stored result, or None if a submission already existed.
            Storage is left untouched in that case.
        """
        if self.get_result_for_student(result.exam_id, result.student_id):
            logger.info(
                f"Ignoring duplicate submission for exam {result.exam_id} "
                f"by student {result.student_id}"
            )
            return None

        self.db.add(result)
        try:
            self.db.commit()
        except IntegrityError:
            # Concurrent submission won the race on uq_exam_result_student
            self.db.rollback()
            logger.warning(
                f"Duplicate submission rejected by database for exam "
                f"{result.exam_id} by student {result.student_id}"
            )
            return None
        self.db.refresh(result)
        return result

    def list_results_for_student(
        self, student_id: str
    ) -> List[Tuple[ExamResult, str]]:
        """
        A student's results paired with the exam title.

        Results whose exam no longer exists are labelled "Unknown Exam".
        """
        stmt = (
            select(ExamResult, Exam.title)
            .outerjoin(Exam, Exam.id == ExamResult.exam_id)
            .where(ExamResult.student_id == student_id)
            .order_by(ExamResult.submitted_at.desc())
        )
        return [
            (result, title if title is not None else UNKNOWN_EXAM_TITLE)
            for result, title in self.db.execute(stmt).all()
        ]
