"""
Exam Portal - Exam Lifecycle Service
Creates exams, records answers, and scores submissions.

An exam is Active from creation until it is submitted, then Completed.
Completed is terminal: answer writes and re-submission are rejected.
Time limits are advisory; the server never expires an exam on its own.
"""
import logging
import uuid
from datetime import timedelta

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from exam_portal.core.database import utcnow
from exam_portal.core.errors import (
    AlreadyCompleted,
    Forbidden,
    InternalError,
    NoQuestionsAvailable,
    NotFound,
    ValidationError,
)
from exam_portal.models.exam import Exam, ExamResult
from exam_portal.models.question import OPTION_COUNT, Question
from exam_portal.schemas.exam import ExamResponse, ExamStartResponse
from exam_portal.schemas.question import QuestionPublic
from exam_portal.services.scoring import grade_answers, minutes_between, percentage

logger = logging.getLogger(__name__)

DEFAULT_QUESTION_COUNT = 10
DEFAULT_TIME_LIMIT_MINUTES = 30


class ExamService:
    """Service for the exam lifecycle. One instance per request session."""

    def __init__(
        self,
        db: AsyncSession,
        question_count: int = DEFAULT_QUESTION_COUNT,
        default_time_limit: int = DEFAULT_TIME_LIMIT_MINUTES,
    ):
        self.db = db
        self.question_count = question_count
        self.default_time_limit = default_time_limit

    async def start_exam(
        self,
        user_id: uuid.UUID,
        time_limit: int | None = None,
        question_count: int | None = None,
    ) -> ExamStartResponse:
        """
        Start a new exam from a random sample of the question bank.

        Raises:
            NoQuestionsAvailable: If the bank is empty
        """
        time_limit = time_limit or self.default_time_limit
        if time_limit < 1:
            raise ValidationError("timeLimit must be a positive number of minutes")

        questions = await self._sample_questions(question_count or self.question_count)
        if not questions:
            raise NoQuestionsAvailable()

        start_time = utcnow()
        exam = Exam(
            user_id=user_id,
            question_ids=[str(q.id) for q in questions],
            answers=[None] * len(questions),
            total_questions=len(questions),
            time_limit=time_limit,
            start_time=start_time,
            end_time=start_time + timedelta(minutes=time_limit),
            submitted_at=None,
            is_completed=False,
        )
        self.db.add(exam)
        await self.db.flush()

        logger.info(
            "Exam %s started by user %s (%d questions, %d min)",
            exam.id, user_id, exam.total_questions, time_limit,
        )

        return ExamStartResponse(
            exam_id=exam.id,
            questions=[QuestionPublic.model_validate(q) for q in questions],
            time_limit=exam.time_limit,
            total_questions=exam.total_questions,
            start_time=exam.start_time,
            end_time=exam.end_time,
        )

    async def get_exam(self, user_id: uuid.UUID, exam_id: uuid.UUID) -> ExamResponse:
        """Current state of an exam. Never exposes correct answers."""
        exam = await self._get_owned_exam(user_id, exam_id)
        questions = await self._load_questions(exam)

        return ExamResponse(
            exam_id=exam.id,
            questions=[QuestionPublic.model_validate(q) for q in questions],
            time_limit=exam.time_limit,
            total_questions=exam.total_questions,
            start_time=exam.start_time,
            end_time=exam.end_time,
            answers=list(exam.answers),
            is_completed=exam.is_completed,
            submitted_at=exam.submitted_at,
        )

    async def save_answer(
        self,
        user_id: uuid.UUID,
        exam_id: uuid.UUID,
        question_index: int,
        answer: int | None,
    ) -> None:
        """
        Overwrite exactly one answer slot. Replaying the same write is a no-op.

        Raises:
            AlreadyCompleted: If the exam has been submitted
            ValidationError: If the index or answer is out of range
        """
        exam = await self._get_owned_exam(user_id, exam_id, for_update=True)

        if exam.is_completed:
            logger.warning("Rejected answer write on completed exam %s", exam.id)
            raise AlreadyCompleted()

        if not 0 <= question_index < exam.total_questions:
            raise ValidationError(
                f"questionIndex must be between 0 and {exam.total_questions - 1}"
            )
        if answer is not None and not 0 <= answer < OPTION_COUNT:
            raise ValidationError(f"answer must be between 0 and {OPTION_COUNT - 1} or null")

        answers = list(exam.answers)
        answers[question_index] = answer

        result = await self.db.execute(
            update(Exam)
            .where(Exam.id == exam.id, Exam.is_completed.is_(False))
            .values(answers=answers)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise AlreadyCompleted()

    async def submit_exam(self, user_id: uuid.UUID, exam_id: uuid.UUID) -> uuid.UUID:
        """
        Complete the exam, score it, and store its result.

        The completion transition is one conditional update, so only one of
        several concurrent submissions can succeed.

        Returns:
            The new result's id

        Raises:
            AlreadyCompleted: If the exam has already been submitted
        """
        exam = await self._get_owned_exam(user_id, exam_id, for_update=True)

        if exam.is_completed:
            logger.warning("Rejected re-submission of exam %s", exam.id)
            raise AlreadyCompleted()

        submitted_at = utcnow()
        marked = await self.db.execute(
            update(Exam)
            .where(Exam.id == exam.id, Exam.is_completed.is_(False))
            .values(is_completed=True, submitted_at=submitted_at, end_time=submitted_at)
            .execution_options(synchronize_session=False)
        )
        if marked.rowcount == 0:
            raise AlreadyCompleted()

        questions = await self._load_questions(exam)
        score, details = grade_answers(questions, exam.answers)

        result = ExamResult(
            exam_id=exam.id,
            user_id=user_id,
            score=score,
            total_questions=exam.total_questions,
            percentage=percentage(score, exam.total_questions),
            answers=details,
            time_taken=minutes_between(exam.start_time, submitted_at),
            created_at=submitted_at,
        )
        self.db.add(result)
        await self.db.flush()

        logger.info(
            "Exam %s submitted by user %s: %d/%d (%d%%)",
            exam.id, user_id, score, exam.total_questions, result.percentage,
        )
        return result.id

    async def _get_owned_exam(
        self,
        user_id: uuid.UUID,
        exam_id: uuid.UUID,
        for_update: bool = False,
    ) -> Exam:
        query = select(Exam).where(Exam.id == exam_id).execution_options(populate_existing=True)
        if for_update:
            query = query.with_for_update()

        exam = (await self.db.execute(query)).scalar_one_or_none()
        if exam is None:
            raise NotFound("Exam not found")

        if exam.user_id != user_id:
            logger.warning("User %s denied access to exam %s", user_id, exam_id)
            raise Forbidden()

        return exam

    async def _sample_questions(self, count: int) -> list[Question]:
        """Random sample without replacement; fewer if the bank is smaller."""
        result = await self.db.execute(
            select(Question).order_by(func.random()).limit(count)
        )
        return list(result.scalars().all())

    async def _load_questions(self, exam: Exam) -> list[Question]:
        """Questions of an exam in exam order."""
        ids = [uuid.UUID(question_id) for question_id in exam.question_ids]
        result = await self.db.execute(select(Question).where(Question.id.in_(ids)))
        by_id = {q.id: q for q in result.scalars().all()}

        missing = [str(question_id) for question_id in ids if question_id not in by_id]
        if missing:
            logger.error("Exam %s references missing questions: %s", exam.id, missing)
            raise InternalError("Question bank is missing questions for this exam")

        return [by_id[question_id] for question_id in ids]
