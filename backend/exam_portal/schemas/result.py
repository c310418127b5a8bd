"""
Exam Portal - Result Schemas
"""
import uuid
from datetime import datetime

from pydantic import computed_field

from exam_portal.schemas.base import CamelModel
from exam_portal.services.scoring import letter_grade


class AnswerDetail(CamelModel):
    """Per-question outcome, with the question text and options copied in."""
    question_id: uuid.UUID
    question: str
    options: list[str]
    user_answer: int | None = None
    correct_answer: int
    is_correct: bool


class ResultResponse(CamelModel):
    """Scored result of a submitted exam."""
    id: uuid.UUID
    exam_id: uuid.UUID
    user_id: uuid.UUID
    score: int
    total_questions: int
    percentage: int
    answers: list[AnswerDetail]
    time_taken: int
    created_at: datetime

    @computed_field
    @property
    def grade(self) -> str:
        return letter_grade(self.percentage)


class ResultsSummary(CamelModel):
    """Aggregate over all of a user's results."""
    total_exams: int
    average_percentage: int | None = None
    best_percentage: int | None = None
