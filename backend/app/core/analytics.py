"""
Analytics and event tracking for monitoring user actions and system events.
"""
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Dict, Any

from app.core.config import settings

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    """Analytics event types."""

    # Authentication events
    USER_REGISTERED = "user.registered"
    USER_LOGIN = "user.login"

    # Exam events
    EXAM_CREATED = "exam.created"
    EXAM_STATUS_CHANGED = "exam.status_changed"
    EXAM_JOINED = "exam.joined"
    RESULT_SUBMITTED = "exam.result_submitted"
    STATS_VIEWED = "exam.stats_viewed"
    RESULTS_EXPORTED = "exam.results_exported"

    # Generation events
    QUIZ_GENERATION_FAILED = "generation.failed"

    API_ERROR = "api.error"


class AnalyticsTracker:
    """
    Analytics event tracker for logging and monitoring user actions.

    Events are written to the application log with structured ``event_data``.
    """

    @staticmethod
    def track_event(
        event_type: EventType,
        user_id: Optional[str] = None,
        properties: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Track an analytics event.

        Example:
            AnalyticsTracker.track_event(
                EventType.RESULT_SUBMITTED,
                user_id="2f1c...",
                properties={"exam_id": "9a0b...", "score": 8}
            )
        """
        event_data = {
            "event": event_type.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "user_id": user_id,
            "properties": properties or {},
            "environment": settings.ENV,
        }

        logger.info(
            f"Analytics Event: {event_type.value}",
            extra={"event_data": event_data},
        )

    @staticmethod
    def track_user_registered(user_id: str, role: str) -> None:
        AnalyticsTracker.track_event(
            EventType.USER_REGISTERED,
            user_id=user_id,
            properties={"role": role},
        )

    @staticmethod
    def track_user_login(user_id: str) -> None:
        AnalyticsTracker.track_event(EventType.USER_LOGIN, user_id=user_id)

    @staticmethod
    def track_exam_created(user_id: str, exam_id: str, question_count: int) -> None:
        AnalyticsTracker.track_event(
            EventType.EXAM_CREATED,
            user_id=user_id,
            properties={"exam_id": exam_id, "question_count": question_count},
        )

    @staticmethod
    def track_exam_status_changed(user_id: str, exam_id: str, status: str) -> None:
        AnalyticsTracker.track_event(
            EventType.EXAM_STATUS_CHANGED,
            user_id=user_id,
            properties={"exam_id": exam_id, "status": status},
        )

    @staticmethod
    def track_exam_joined(user_id: str, exam_id: str) -> None:
        AnalyticsTracker.track_event(
            EventType.EXAM_JOINED, user_id=user_id, properties={"exam_id": exam_id}
        )

    @staticmethod
    def track_result_submitted(
        user_id: str, exam_id: str, score: int, total_questions: int
    ) -> None:
        """Track a completed exam submission."""
        AnalyticsTracker.track_event(
            EventType.RESULT_SUBMITTED,
            user_id=user_id,
            properties={
                "exam_id": exam_id,
                "score": score,
                "total_questions": total_questions,
            },
        )

    @staticmethod
    def track_stats_viewed(user_id: str, exam_id: str, submission_count: int) -> None:
        AnalyticsTracker.track_event(
            EventType.STATS_VIEWED,
            user_id=user_id,
            properties={"exam_id": exam_id, "submission_count": submission_count},
        )

    @staticmethod
    def track_results_exported(user_id: str, exam_id: str, row_count: int) -> None:
        AnalyticsTracker.track_event(
            EventType.RESULTS_EXPORTED,
            user_id=user_id,
            properties={"exam_id": exam_id, "row_count": row_count},
        )

    @staticmethod
    def track_quiz_generation_failed(user_id: str, error_message: str) -> None:
        AnalyticsTracker.track_event(
            EventType.QUIZ_GENERATION_FAILED,
            user_id=user_id,
            properties={"error_message": error_message},
        )

    @staticmethod
    def track_api_error(
        method: str,
        path: str,
        error_type: str,
        error_message: str,
        user_id: Optional[str] = None,
    ) -> None:
        """Track API error."""
        AnalyticsTracker.track_event(
            EventType.API_ERROR,
            user_id=user_id,
            properties={
                "method": method,
                "path": path,
                "error_type": error_type,
                "error_message": error_message,
            },
        )
