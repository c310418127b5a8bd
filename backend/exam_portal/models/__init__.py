"""Exam Portal - Models initialization."""
from exam_portal.models.user import User
from exam_portal.models.question import Question, DifficultyLevel, OPTION_COUNT
from exam_portal.models.exam import Exam, ExamResult


__all__ = [
    # User models
    "User",
    # Question bank
    "Question",
    "DifficultyLevel",
    "OPTION_COUNT",
    # Exam & Result models
    "Exam",
    "ExamResult",
]
