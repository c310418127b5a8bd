"""
Exam Portal - Exam Schemas
Pydantic schemas for exam lifecycle requests and responses
"""
import uuid
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field

from exam_portal.models.question import OPTION_COUNT
from exam_portal.schemas.base import CamelModel
from exam_portal.schemas.question import QuestionPublic

AnswerIndex = Annotated[int, Field(ge=0, lt=OPTION_COUNT)]


class ExamStartRequest(CamelModel):
    """Request to start an exam."""
    time_limit: int | None = Field(default=None, ge=1, description="Time limit in minutes (default 30)")
    question_count: int | None = Field(default=None, ge=1, le=50, description="Number of questions (default 10)")


class ExamStartResponse(CamelModel):
    """Response when starting an exam."""
    exam_id: uuid.UUID
    questions: list[QuestionPublic]
    time_limit: int
    total_questions: int
    start_time: datetime
    end_time: datetime


class ExamResponse(ExamStartResponse):
    """Current state of an exam, including saved answers."""
    answers: list[AnswerIndex | None]
    is_completed: bool
    submitted_at: datetime | None = None


class AnswerSaveRequest(CamelModel):
    """Write one answer slot. ``answer`` is required but may be null to clear it."""
    question_index: int = Field(..., ge=0)
    answer: AnswerIndex | None


class AnswerSaveResponse(BaseModel):
    success: bool = True


class ExamSubmitResponse(CamelModel):
    result_id: uuid.UUID
