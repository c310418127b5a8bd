"""
Exam Portal - Result Service
Ownership-checked access to scored results
"""
import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from exam_portal.core.errors import Forbidden, NotFound
from exam_portal.models.exam import ExamResult
from exam_portal.schemas.result import ResultResponse, ResultsSummary
from exam_portal.services.scoring import round_half_up

logger = logging.getLogger(__name__)


class ResultService:
    """Read-only access to results. Results are never modified after creation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_result(self, user_id: uuid.UUID, result_id: uuid.UUID) -> ResultResponse:
        result = await self.db.get(ExamResult, result_id)
        if result is None:
            raise NotFound("Result not found")

        if result.user_id != user_id:
            logger.warning("User %s denied access to result %s", user_id, result_id)
            raise Forbidden()

        return ResultResponse.model_validate(result)

    async def list_results(self, user_id: uuid.UUID) -> list[ResultResponse]:
        """All of a user's results, newest first."""
        rows = await self._user_results(user_id)
        return [ResultResponse.model_validate(r) for r in rows]

    async def summary(self, user_id: uuid.UUID) -> ResultsSummary:
        rows = await self._user_results(user_id)
        if not rows:
            return ResultsSummary(total_exams=0)

        percentages = [r.percentage for r in rows]
        return ResultsSummary(
            total_exams=len(rows),
            average_percentage=round_half_up(sum(percentages) / len(percentages)),
            best_percentage=max(percentages),
        )

    async def _user_results(self, user_id: uuid.UUID) -> list[ExamResult]:
        result = await self.db.execute(
            select(ExamResult)
            .where(ExamResult.user_id == user_id)
            .order_by(ExamResult.created_at.desc())
        )
        return list(result.scalars().all())
