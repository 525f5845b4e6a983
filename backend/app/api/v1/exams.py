"""
Exam endpoints: creation from text, status changes, joining and submission.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, status

from app.api.v1.dependencies import (
    get_owned_exam,
    get_quiz_generator,
    get_quiz_repository,
)
from app.core.analytics import AnalyticsTracker
from app.core.auth import get_current_student, get_current_teacher
from app.core.error_responses import (
    ErrorMessages,
    raise_bad_gateway,
    raise_bad_request,
    raise_conflict,
    raise_not_found,
    raise_server_error,
    raise_unprocessable,
)
from app.core.exams import (
    RoomCodeAllocationError,
    allocate_room_code,
    grade_answers,
    questions_for_student,
)
from app.core.quiz_generation import QuizGenerationError, QuizGenerator
from app.db.repository import QuizRepository
from app.models import Exam, ExamResult, ExamStatus, User
from app.schemas.exams import (
    ExamCreate,
    ExamResponse,
    ExamStatusUpdate,
    ExamSummaryResponse,
    JoinExamRequest,
    StudentExamResponse,
)
from app.schemas.results import ExamResultResponse, SubmissionCreate

logger = logging.getLogger(__name__)

router = APIRouter()


def _student_view(exam: Exam) -> StudentExamResponse:
    return StudentExamResponse(
        id=exam.id,
        title=exam.title,
        room_code=exam.room_code,
        status=exam.status,
        question_count=exam.question_count,
        created_at=exam.created_at,
        questions=questions_for_student(exam.questions),
    )


def _ensure_can_take(exam: Exam, student: User, repository: QuizRepository) -> None:
    """Reject closed exams and exams the student already submitted (409)."""
    if exam.status == ExamStatus.CLOSED:
        raise_conflict(ErrorMessages.EXAM_CLOSED)
    if repository.get_result_for_student(exam.id, student.id) is not None:
        raise_conflict(ErrorMessages.ALREADY_SUBMITTED)


@router.post("", response_model=ExamResponse, status_code=status.HTTP_201_CREATED)
def create_exam(
    exam_data: ExamCreate,
    teacher: User = Depends(get_current_teacher),
    repository: QuizRepository = Depends(get_quiz_repository),
    generator: QuizGenerator = Depends(get_quiz_generator),
):
    """
    Generate questions from the given text and create an OPEN exam.

    Raises:
        HTTPException: 502 if generation fails, 422 if no questions came back
    """
    try:
        questions = generator.generate(exam_data.content)
    except QuizGenerationError as e:
        AnalyticsTracker.track_quiz_generation_failed(
            user_id=teacher.id, error_message=str(e)
        )
        raise_bad_gateway(str(e))

    if not questions:
        raise_unprocessable(ErrorMessages.NO_QUESTIONS_GENERATED)

    try:
        room_code = allocate_room_code(repository)
    except RoomCodeAllocationError as e:
        logger.error(f"Room code allocation failed: {e}")
        raise_server_error(ErrorMessages.ROOM_CODE_EXHAUSTED)

    exam = Exam(
        teacher_id=teacher.id,
        title=exam_data.title,
        room_code=room_code,
        questions=[q.model_dump(by_alias=False) for q in questions],
        status=ExamStatus.OPEN,
    )
    exam = repository.save_exam(exam)

    AnalyticsTracker.track_exam_created(
        user_id=teacher.id, exam_id=exam.id, question_count=exam.question_count
    )
    return exam


@router.get("", response_model=List[ExamSummaryResponse])
def list_my_exams(
    teacher: User = Depends(get_current_teacher),
    repository: QuizRepository = Depends(get_quiz_repository),
):
    """List the teacher's exams, newest first."""
    return repository.list_exams_for_teacher(teacher.id)


@router.post("/join", response_model=StudentExamResponse)
def join_exam(
    join_data: JoinExamRequest,
    student: User = Depends(get_current_student),
    repository: QuizRepository = Depends(get_quiz_repository),
):
    """
    Join an exam by room code.

    Raises:
        HTTPException: 404 for an unknown code, 409 if the exam is closed
            or was already submitted
    """
    exam = repository.get_exam_by_room_code(join_data.room_code)
    if exam is None:
        raise_not_found(ErrorMessages.INVALID_ROOM_CODE)

    _ensure_can_take(exam, student, repository)

    AnalyticsTracker.track_exam_joined(user_id=student.id, exam_id=exam.id)
    return _student_view(exam)


@router.get("/{exam_id}", response_model=ExamResponse)
def get_exam(
    exam_id: str,
    teacher: User = Depends(get_current_teacher),
    repository: QuizRepository = Depends(get_quiz_repository),
):
    """Full exam, including correct answers, for its teacher."""
    return get_owned_exam(exam_id, repository, teacher)


@router.patch("/{exam_id}/status", response_model=ExamSummaryResponse)
def update_exam_status(
    exam_id: str,
    status_update: ExamStatusUpdate,
    teacher: User = Depends(get_current_teacher),
    repository: QuizRepository = Depends(get_quiz_repository),
):
    """Open or close an exam for new submissions."""
    get_owned_exam(exam_id, repository, teacher)
    exam = repository.update_exam_status(exam_id, status_update.status)
    if exam is None:
        raise_not_found(ErrorMessages.EXAM_NOT_FOUND)

    AnalyticsTracker.track_exam_status_changed(
        user_id=teacher.id, exam_id=exam_id, status=exam.status.value
    )
    return exam


@router.post(
    "/{exam_id}/submissions",
    response_model=ExamResultResponse,
    status_code=status.HTTP_201_CREATED,
)
def submit_exam(
    exam_id: str,
    submission: SubmissionCreate,
    student: User = Depends(get_current_student),
    repository: QuizRepository = Depends(get_quiz_repository),
):
    """
    Submit answers for an exam. The score is computed server-side.

    Raises:
        HTTPException: 404 unknown exam, 400 wrong number of answers or an
            out-of-range option, 409 closed exam or duplicate submission
    """
    exam = repository.get_exam(exam_id)
    if exam is None:
        raise_not_found(ErrorMessages.EXAM_NOT_FOUND)

    _ensure_can_take(exam, student, repository)

    answers = submission.answers
    if len(answers) != exam.question_count:
        raise_bad_request(
            ErrorMessages.answer_count_mismatch(exam.question_count, len(answers))
        )
    for number, (question, answer) in enumerate(zip(exam.questions, answers), 1):
        if answer >= len(question["options"]):
            raise_bad_request(ErrorMessages.invalid_answer_index(number, answer))

    result = ExamResult(
        exam_id=exam.id,
        student_id=student.id,
        student_name=student.name,
        score=grade_answers(exam.questions, answers),
        total_questions=exam.question_count,
        answers=answers,
    )
    saved = repository.save_result(result)
    if saved is None:
        raise_conflict(ErrorMessages.ALREADY_SUBMITTED)

    AnalyticsTracker.track_result_submitted(
        user_id=student.id,
        exam_id=exam.id,
        score=saved.score,
        total_questions=saved.total_questions,
    )
    return saved
