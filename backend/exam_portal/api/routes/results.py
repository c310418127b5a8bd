"""
Exam Portal - Results API
"""
import uuid

from fastapi import APIRouter

from exam_portal.api.deps import CurrentUser, ResultServiceDep
from exam_portal.schemas.result import ResultResponse, ResultsSummary

router = APIRouter(prefix="/results", tags=["Results"])


@router.get("", response_model=list[ResultResponse])
async def list_results(
    current_user: CurrentUser,
    result_service: ResultServiceDep,
):
    """Get all results of the current user, newest first."""
    return await result_service.list_results(current_user.id)


@router.get("/summary", response_model=ResultsSummary)
async def results_summary(
    current_user: CurrentUser,
    result_service: ResultServiceDep,
):
    """Exam count, average and best percentage for the dashboard."""
    return await result_service.summary(current_user.id)


@router.get("/{result_id}", response_model=ResultResponse)
async def get_result(
    result_id: uuid.UUID,
    current_user: CurrentUser,
    result_service: ResultServiceDep,
):
    return await result_service.get_result(current_user.id, result_id)
