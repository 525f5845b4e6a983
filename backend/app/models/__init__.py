"""
Models package for SmartExam backend.
"""
from .base import Base, engine, SessionLocal, get_db
from .models import (
    User,
    Exam,
    ExamResult,
    UserRole,
    ExamStatus,
)

__all__ = [
    "Base",
    "engine",
    "SessionLocal",
    "get_db",
    "User",
    "Exam",
    "ExamResult",
    "UserRole",
    "ExamStatus",
]
