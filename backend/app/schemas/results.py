"""
Pydantic schemas for exam submissions and results.
"""
from datetime import datetime
from typing import List

from pydantic import BaseModel, Field, field_validator

from app.core.exams import UNANSWERED


class SubmissionCreate(BaseModel):
    """Schema for submitting an exam: one option index per question."""

    answers: List[int] = Field(
        ...,
        description="Selected option index per question, -1 for unanswered",
    )

    @field_validator("answers")
    @classmethod
    def validate_answers(cls, v: List[int]) -> List[int]:
        if any(a < UNANSWERED for a in v):
            raise ValueError("Answer indexes must be -1 (unanswered) or greater")
        return v


class ExamResultResponse(BaseModel):
    """A stored exam submission."""

    id: str = Field(..., description="Result ID")
    exam_id: str = Field(..., description="Exam ID")
    student_id: str = Field(..., description="Student user ID")
    student_name: str = Field(..., description="Student display name")
    score: int = Field(..., description="Number of correct answers")
    total_questions: int = Field(..., description="Number of questions in the exam")
    percentage: float = Field(..., description="Score as a 0-100 percentage")
    answers: List[int] = Field(..., description="Submitted option indexes")
    submitted_at: datetime = Field(..., description="Submission timestamp")

    class Config:
        """Pydantic configuration."""

        from_attributes = True


class StudentHistoryItem(BaseModel):
    """A student's past result with the exam title."""

    result: ExamResultResponse
    exam_title: str = Field(..., description="Exam title, or 'Unknown Exam'")


class LeaderboardResponse(BaseModel):
    """Results of one exam, highest score first."""

    exam_id: str
    total_questions: int
    results: List[ExamResultResponse]
