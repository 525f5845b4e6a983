"""
Tests for analytics event tracking.
"""
from unittest.mock import patch

from app.core.analytics import AnalyticsTracker, EventType


class TestAnalyticsTracker:
    @patch("app.core.analytics.logger")
    def test_event_logged_with_structured_data(self, mock_logger):
        """Test that events are logged with event_data attached."""
        AnalyticsTracker.track_event(
            EventType.EXAM_CREATED,
            user_id="teacher-1",
            properties={"exam_id": "exam-1", "question_count": 5},
        )

        message = mock_logger.info.call_args.args[0]
        event_data = mock_logger.info.call_args.kwargs["extra"]["event_data"]
        assert message == "Analytics Event: exam.created"
        assert event_data["user_id"] == "teacher-1"
        assert event_data["properties"] == {"exam_id": "exam-1", "question_count": 5}

    @patch("app.core.analytics.logger")
    def test_result_submitted_properties(self, mock_logger):
        AnalyticsTracker.track_result_submitted(
            user_id="student-1", exam_id="exam-1", score=3, total_questions=4
        )

        event_data = mock_logger.info.call_args.kwargs["extra"]["event_data"]
        assert event_data["event"] == "exam.result_submitted"
        assert event_data["properties"]["score"] == 3
        assert event_data["properties"]["total_questions"] == 4
