"""
Tests for room code allocation, grading and student question views.
"""
from unittest.mock import MagicMock

import pytest

from app.core.exams import (
    ROOM_CODE_ALPHABET,
    UNANSWERED,
    RoomCodeAllocationError,
    allocate_room_code,
    generate_room_code,
    grade_answers,
    questions_for_student,
)

QUESTIONS = [
    {"id": 1, "text": "Q1?", "options": ["a", "b", "c"], "correct_answer_index": 2},
    {"id": 2, "text": "Q2?", "options": ["a", "b"], "correct_answer_index": 0},
    {"id": 3, "text": "Q3?", "options": ["a", "b"], "correct_answer_index": 1},
]


class TestRoomCodes:
    def test_generated_code_shape(self):
        code = generate_room_code(8)

        assert len(code) == 8
        assert all(ch in ROOM_CODE_ALPHABET for ch in code)

    def test_allocate_skips_taken_codes(self):
        repository = MagicMock()
        repository.room_code_exists.side_effect = [True, True, False]

        code = allocate_room_code(repository)

        assert len(code) == 6
        assert repository.room_code_exists.call_count == 3

    def test_allocate_gives_up_after_max_attempts(self):
        """Test that allocation fails once every attempt collided."""
        repository = MagicMock()
        repository.room_code_exists.return_value = True

        with pytest.raises(RoomCodeAllocationError):
            allocate_room_code(repository)

        assert repository.room_code_exists.call_count == 10


class TestGradeAnswers:
    def test_all_correct(self):
        assert grade_answers(QUESTIONS, [2, 0, 1]) == 3

    def test_partially_correct(self):
        assert grade_answers(QUESTIONS, [2, 1, 0]) == 1

    def test_unanswered_never_counts(self):
        assert grade_answers(QUESTIONS, [UNANSWERED, UNANSWERED, 1]) == 1


class TestQuestionsForStudent:
    def test_correct_answers_removed(self):
        student_questions = questions_for_student(QUESTIONS)

        assert all("correct_answer_index" not in q for q in student_questions)
        assert student_questions[0] == {"id": 1, "text": "Q1?", "options": ["a", "b", "c"]}

    def test_original_questions_untouched(self):
        questions_for_student(QUESTIONS)

        assert QUESTIONS[0]["correct_answer_index"] == 2
