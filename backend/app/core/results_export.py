"""
CSV export of exam results.
"""
import csv
import io
import re
from typing import Sequence

from app.core.datetime_utils import isoformat_utc
from app.models.models import ExamResult

CSV_HEADERS = ["Student Name", "Score", "Total", "Percentage", "Submitted At"]


def results_to_csv(results: Sequence[ExamResult], total_questions: int) -> str:
    """
    Render results as CSV, one row per result in the given order.

    Percentages are relative to the exam's current question count and
    formatted with two decimals, e.g. ``80.00%``.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for result in results:
        writer.writerow(
            [
                result.student_name,
                result.score,
                total_questions,
                f"{(result.score / total_questions) * 100:.2f}%",
                isoformat_utc(result.submitted_at),
            ]
        )
    return buffer.getvalue()


def export_filename(exam_title: str) -> str:
    """Download filename for an exam's results, e.g. ``Biology_101_results.csv``."""
    safe_title = re.sub(r"[^A-Za-z0-9_-]+", "_", exam_title).strip("_") or "exam"
    return f"{safe_title}_results.csv"
