"""
Exam Portal - Scoring
Pure helpers for grading an exam and formatting its result
"""
import math
from collections.abc import Sequence
from datetime import datetime
from typing import Any

from exam_portal.core.database import as_utc
from exam_portal.models.question import Question

# Lower bounds, checked in order
GRADE_THRESHOLDS = [
    (90, "A+"),
    (80, "A"),
    (70, "B"),
    (60, "C"),
    (50, "D"),
]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for non-negative values."""
    return math.floor(value + 0.5)


def grade_answers(
    questions: Sequence[Question],
    answers: Sequence[int | None],
) -> tuple[int, list[dict[str, Any]]]:
    """
    Compare each stored answer to its question's correct answer.

    Args:
        questions: Questions in exam order
        answers: Answer slots in the same order (None = unanswered)

    Returns:
        (score, details) where details holds one entry per question
    """
    score = 0
    details = []

    for question, user_answer in zip(questions, answers, strict=True):
        is_correct = user_answer is not None and user_answer == question.correct_answer
        if is_correct:
            score += 1

        details.append({
            "question_id": str(question.id),
            "question": question.question,
            "options": list(question.options),
            "user_answer": user_answer,
            "correct_answer": question.correct_answer,
            "is_correct": is_correct,
        })

    return score, details


def percentage(score: int, total: int) -> int:
    if total <= 0:
        return 0
    return round_half_up(score / total * 100)


def minutes_between(start: datetime, end: datetime) -> int:
    """Elapsed time in whole minutes."""
    elapsed = as_utc(end) - as_utc(start)
    return round_half_up(elapsed.total_seconds() / 60)


def letter_grade(percent: int) -> str:
    for threshold, grade in GRADE_THRESHOLDS:
        if percent >= threshold:
            return grade
    return "F"
