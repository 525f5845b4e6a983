"""
Pydantic schemas for request/response validation.
"""
from .auth import (
    UserRegister,
    UserLogin,
    UserResponse,
    Token,
)
from .exams import (
    ExamCreate,
    ExamStatusUpdate,
    JoinExamRequest,
    QuestionResponse,
    StudentQuestionResponse,
    ExamSummaryResponse,
    ExamResponse,
    StudentExamResponse,
)
from .results import (
    SubmissionCreate,
    ExamResultResponse,
    StudentHistoryItem,
    LeaderboardResponse,
)
from .stats import ScoreBin, ExamStatsResponse

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "Token",
    "ExamCreate",
    "ExamStatusUpdate",
    "JoinExamRequest",
    "QuestionResponse",
    "StudentQuestionResponse",
    "ExamSummaryResponse",
    "ExamResponse",
    "StudentExamResponse",
    "SubmissionCreate",
    "ExamResultResponse",
    "StudentHistoryItem",
    "LeaderboardResponse",
    "ScoreBin",
    "ExamStatsResponse",
]
