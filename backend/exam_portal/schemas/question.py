"""
Exam Portal - Question Schemas
"""
import uuid
from typing import Annotated

from pydantic import BaseModel, Field, field_validator

from exam_portal.models.question import OPTION_COUNT, DifficultyLevel
from exam_portal.schemas.base import CamelModel


class QuestionCreate(BaseModel):
    """A question entering the bank. Enforces the four-option invariant."""
    question: Annotated[str, Field(min_length=1)]
    options: list[str] = Field(..., min_length=OPTION_COUNT, max_length=OPTION_COUNT)
    correct_answer: int = Field(..., ge=0, lt=OPTION_COUNT)
    difficulty: DifficultyLevel = DifficultyLevel.EASY
    subject: Annotated[str, Field(min_length=1, max_length=100)]

    @field_validator("options")
    @classmethod
    def validate_options(cls, v: list[str]) -> list[str]:
        if any(not option.strip() for option in v):
            raise ValueError("Options must not be blank")
        return v


class QuestionPublic(CamelModel):
    """Question as shown during an exam. The correct answer is withheld."""
    id: uuid.UUID
    question: str
    options: list[str]
