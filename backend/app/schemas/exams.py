"""
Pydantic schemas for exam endpoints.
"""
from datetime import datetime
from typing import List

from pydantic import BaseModel, Field, field_validator

from app.core.validators import RoomCodeValidator, StringSanitizer, TextValidator
from app.models.models import ExamStatus


class ExamCreate(BaseModel):
    """Schema for creating an exam from source text."""

    title: str = Field(..., min_length=1, max_length=200, description="Exam title")
    content: str = Field(
        ...,
        min_length=1,
        max_length=200_000,
        description="Source text the questions are generated from",
    )

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return TextValidator.validate_non_empty_text(
            StringSanitizer.sanitize_title(v), "Title"
        )

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        return TextValidator.validate_non_empty_text(
            StringSanitizer.sanitize_content(v), "Content"
        )


class ExamStatusUpdate(BaseModel):
    """Schema for opening or closing an exam."""

    status: ExamStatus = Field(..., description="OPEN or CLOSED")


class JoinExamRequest(BaseModel):
    """Schema for a student joining an exam by room code."""

    room_code: str = Field(..., description="Room code shown by the teacher")

    @field_validator("room_code")
    @classmethod
    def validate_room_code(cls, v: str) -> str:
        return RoomCodeValidator.normalize(v)


class QuestionResponse(BaseModel):
    """A question as shown to the teacher, including the correct answer."""

    id: int = Field(..., description="Question number within the exam")
    text: str = Field(..., description="Question text")
    options: List[str] = Field(..., description="Answer options")
    correct_answer_index: int = Field(
        ..., description="Zero-based index of the correct option"
    )


class StudentQuestionResponse(BaseModel):
    """A question as shown to a student taking the exam."""

    id: int = Field(..., description="Question number within the exam")
    text: str = Field(..., description="Question text")
    options: List[str] = Field(..., description="Answer options")


class ExamSummaryResponse(BaseModel):
    """Exam fields shared by every view."""

    id: str = Field(..., description="Exam ID")
    title: str = Field(..., description="Exam title")
    room_code: str = Field(..., description="Room code students join with")
    status: ExamStatus = Field(..., description="OPEN or CLOSED")
    question_count: int = Field(..., description="Number of questions")
    created_at: datetime = Field(..., description="Creation timestamp")

    class Config:
        """Pydantic configuration."""

        from_attributes = True


class ExamResponse(ExamSummaryResponse):
    """Full exam for its teacher."""

    teacher_id: str = Field(..., description="ID of the teacher who owns the exam")
    questions: List[QuestionResponse] = Field(..., description="Exam questions")


class StudentExamResponse(ExamSummaryResponse):
    """Exam for a student: questions without correct answers."""

    questions: List[StudentQuestionResponse] = Field(
        ..., description="Exam questions without answers"
    )
