"""
Data access layer.
"""
from .repository import QuizRepository, SqlAlchemyQuizRepository

__all__ = ["QuizRepository", "SqlAlchemyQuizRepository"]
