"""
Results endpoints: leaderboards, statistics, CSV export and student history.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from app.api.v1.dependencies import get_owned_exam, get_quiz_repository
from app.core.analytics import AnalyticsTracker
from app.core.auth import get_current_student, get_current_teacher
from app.core.exam_stats import compute_exam_stats, score_distribution, to_percentages
from app.core.results_export import export_filename, results_to_csv
from app.db.repository import QuizRepository
from app.models import User
from app.schemas.results import LeaderboardResponse, StudentHistoryItem
from app.schemas.stats import ExamStatsResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/exams/{exam_id}/results", response_model=LeaderboardResponse)
def get_exam_results(
    exam_id: str,
    teacher: User = Depends(get_current_teacher),
    repository: QuizRepository = Depends(get_quiz_repository),
):
    """Results of one exam, highest score first."""
    exam = get_owned_exam(exam_id, repository, teacher)
    return {
        "exam_id": exam.id,
        "total_questions": exam.question_count,
        "results": repository.list_results_for_exam(exam.id),
    }


@router.get("/exams/{exam_id}/stats", response_model=ExamStatsResponse)
def get_exam_stats(
    exam_id: str,
    teacher: User = Depends(get_current_teacher),
    repository: QuizRepository = Depends(get_quiz_repository),
):
    """
    Descriptive statistics, t-test against 50% and score distribution.

    Percentages are relative to the exam's current question count.
    """
    exam = get_owned_exam(exam_id, repository, teacher)
    results = repository.list_results_for_exam(exam.id)

    stats = compute_exam_stats(results, exam.question_count)
    distribution = score_distribution(to_percentages(results, exam.question_count))

    AnalyticsTracker.track_stats_viewed(
        user_id=teacher.id, exam_id=exam.id, submission_count=stats.count
    )

    return ExamStatsResponse(
        exam_id=exam.id,
        is_significant=stats.is_significant,
        distribution=distribution,
        **stats.to_dict(),
    )


@router.get("/exams/{exam_id}/results.csv")
def export_exam_results(
    exam_id: str,
    teacher: User = Depends(get_current_teacher),
    repository: QuizRepository = Depends(get_quiz_repository),
):
    """Download the exam's results as CSV."""
    exam = get_owned_exam(exam_id, repository, teacher)
    results = repository.list_results_for_exam(exam.id)

    AnalyticsTracker.track_results_exported(
        user_id=teacher.id, exam_id=exam.id, row_count=len(results)
    )

    return Response(
        content=results_to_csv(results, exam.question_count),
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{export_filename(exam.title)}"'
        },
    )


@router.get("/results/me", response_model=List[StudentHistoryItem])
def get_my_results(
    student: User = Depends(get_current_student),
    repository: QuizRepository = Depends(get_quiz_repository),
):
    """The authenticated student's past results, newest first."""
    return [
        {"result": result, "exam_title": title}
        for result, title in repository.list_results_for_student(student.id)
    ]
