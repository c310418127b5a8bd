"""
Exam Portal - Exam Models
SQLAlchemy models for timed exams and their scored results
"""
import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from exam_portal.core.database import Base, utcnow


class Exam(Base):
    """
    One timed attempt owned by a user.

    ``question_ids`` and ``answers`` are parallel lists fixed in length at
    creation; each answer slot is None (unanswered) or an option index.
    """

    __tablename__ = "exams"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True
    )

    # Question ids as strings, in presentation order
    question_ids: Mapped[list] = mapped_column(JSON)
    answers: Mapped[list] = mapped_column(JSON)
    total_questions: Mapped[int] = mapped_column(Integer)

    # Time tracking
    time_limit: Mapped[int] = mapped_column(Integer)  # minutes
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    submitted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    is_completed: Mapped[bool] = mapped_column(Boolean, default=False)

    def __repr__(self):
        return f"<Exam {self.id} completed={self.is_completed}>"


class ExamResult(Base):
    """Immutable scoring record, one per submitted exam."""

    __tablename__ = "results"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4
    )
    exam_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("exams.id", ondelete="CASCADE"),
        unique=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True
    )

    # Score details
    score: Mapped[int] = mapped_column(Integer)  # correct answers
    total_questions: Mapped[int] = mapped_column(Integer)
    percentage: Mapped[int] = mapped_column(Integer)  # 0 to 100
    time_taken: Mapped[int] = mapped_column(Integer)  # whole minutes

    # Format: [{ question_id, question, options, user_answer, correct_answer, is_correct }]
    answers: Mapped[list] = mapped_column(JSON)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        index=True
    )

    def __repr__(self):
        return f"<ExamResult exam={self.exam_id} score={self.score}/{self.total_questions}>"
