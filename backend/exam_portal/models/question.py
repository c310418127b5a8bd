"""
Exam Portal - Question Bank Models
Multiple-choice questions sampled into exams
"""
import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import JSON, CheckConstraint, DateTime, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from exam_portal.core.database import Base, utcnow

OPTION_COUNT = 4


class DifficultyLevel(str, Enum):
    """Question difficulty levels."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Question(Base):
    """
    A bank item with exactly four ordered options.

    The position of an option is its answer index, so ``correct_answer``
    always lies in 0..3.
    """

    __tablename__ = "questions"
    __table_args__ = (
        CheckConstraint(
            f"correct_answer >= 0 AND correct_answer < {OPTION_COUNT}",
            name="ck_questions_correct_answer_range",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4
    )
    question: Mapped[str] = mapped_column(Text)
    options: Mapped[list] = mapped_column(JSON)
    correct_answer: Mapped[int] = mapped_column(Integer)
    difficulty: Mapped[DifficultyLevel] = mapped_column(String(20), default=DifficultyLevel.EASY)
    subject: Mapped[str] = mapped_column(String(100), index=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow
    )

    def __repr__(self):
        return f"<Question {self.subject}: {self.question[:40]}>"
