"""
Pytest configuration and shared fixtures for testing.
"""
import os
import sys
from pathlib import Path

# Settings are read at import time, so the test environment must be in place
# before anything under app/ is imported.
_TEST_DB = Path(__file__).parent / "test.db"
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-key-not-for-production")
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_DB}"
os.environ["GEMINI_API_KEY"] = ""

backend_root = Path(__file__).parent.parent
if str(backend_root) not in sys.path:
    sys.path.insert(0, str(backend_root))

from contextlib import asynccontextmanager  # noqa: E402
from typing import Any, Dict, List  # noqa: E402
from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from app.api.v1.dependencies import get_quiz_generator  # noqa: E402
from app.core.quiz_generation import GeneratedQuestion, QuizGenerator  # noqa: E402
from app.core.security import create_access_token  # noqa: E402
from app.main import app  # noqa: E402
from app.models import (  # noqa: E402
    Base,
    Exam,
    ExamResult,
    ExamStatus,
    User,
    UserRole,
    get_db,
)


@asynccontextmanager
async def _test_lifespan(app):
    """No-op lifespan for tests; tables are managed by the db_session fixture."""
    yield


app.router.lifespan_context = _test_lifespan

engine = create_engine(
    f"sqlite:///{_TEST_DB}", connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


SAMPLE_QUESTIONS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "text": "What is the powerhouse of the cell?",
        "options": ["Nucleus", "Mitochondria", "Ribosome", "Golgi body"],
        "correct_answer_index": 1,
    },
    {
        "id": 2,
        "text": "Which molecule carries genetic information?",
        "options": ["DNA", "ATP", "Glucose", "Lipid"],
        "correct_answer_index": 0,
    },
    {
        "id": 3,
        "text": "What do plants release during photosynthesis?",
        "options": ["Nitrogen", "Carbon dioxide", "Oxygen", "Methane"],
        "correct_answer_index": 2,
    },
    {
        "id": 4,
        "text": "Which organelle contains chlorophyll?",
        "options": ["Chloroplast", "Vacuole", "Lysosome", "Centriole"],
        "correct_answer_index": 0,
    },
]


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    """
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def mock_generator():
    """QuizGenerator whose provider is a MagicMock returning SAMPLE_QUESTIONS."""
    generator = MagicMock(spec=QuizGenerator)
    generator.generate.return_value = [
        GeneratedQuestion.model_validate(q) for q in SAMPLE_QUESTIONS
    ]
    return generator


@pytest.fixture(scope="function")
def client(db_session, mock_generator):
    """
    Create a test client with database and quiz generator overrides.
    """

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_quiz_generator] = lambda: mock_generator
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _create_user(db_session, name: str, email: str, role: UserRole) -> User:
    user = User(name=name, email=email, role=role)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def _auth_headers(user: User) -> Dict[str, str]:
    token = create_access_token({"user_id": user.id, "role": user.role.value})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def teacher(db_session):
    return _create_user(db_session, "Ada Teacher", "teacher@example.com", UserRole.TEACHER)


@pytest.fixture
def other_teacher(db_session):
    return _create_user(db_session, "Bo Teacher", "teacher2@example.com", UserRole.TEACHER)


@pytest.fixture
def student(db_session):
    return _create_user(db_session, "Sam Student", "student@example.com", UserRole.STUDENT)


@pytest.fixture
def other_student(db_session):
    return _create_user(db_session, "Kim Student", "student2@example.com", UserRole.STUDENT)


@pytest.fixture
def teacher_headers(teacher):
    return _auth_headers(teacher)


@pytest.fixture
def other_teacher_headers(other_teacher):
    return _auth_headers(other_teacher)


@pytest.fixture
def student_headers(student):
    return _auth_headers(student)


@pytest.fixture
def other_student_headers(other_student):
    return _auth_headers(other_student)


@pytest.fixture
def exam(db_session, teacher):
    """An OPEN exam owned by the teacher fixture."""
    exam = Exam(
        teacher_id=teacher.id,
        title="Cell Biology",
        room_code="BIO123",
        questions=SAMPLE_QUESTIONS,
        status=ExamStatus.OPEN,
    )
    db_session.add(exam)
    db_session.commit()
    db_session.refresh(exam)
    return exam


@pytest.fixture
def make_result(db_session):
    """Factory inserting an ExamResult for an exam."""

    def _make(exam: Exam, student: User, score: int) -> ExamResult:
        result = ExamResult(
            exam_id=exam.id,
            student_id=student.id,
            student_name=student.name,
            score=score,
            total_questions=exam.question_count,
            answers=[0] * exam.question_count,
        )
        db_session.add(result)
        db_session.commit()
        db_session.refresh(result)
        return result

    return _make
