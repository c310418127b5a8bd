"""
Exam Portal - Exam API
Endpoints for the timed exam lifecycle
"""
import uuid

from fastapi import APIRouter

from exam_portal.api.deps import CurrentUser, ExamServiceDep
from exam_portal.schemas.exam import (
    AnswerSaveRequest,
    AnswerSaveResponse,
    ExamResponse,
    ExamStartRequest,
    ExamStartResponse,
    ExamSubmitResponse,
)

router = APIRouter(prefix="/exams", tags=["Exams"])


@router.post("/start", response_model=ExamStartResponse)
async def start_exam(
    current_user: CurrentUser,
    exam_service: ExamServiceDep,
    request: ExamStartRequest | None = None,
):
    """
    Start a new exam.
    Samples questions from the bank; correct answers are not returned.
    """
    request = request or ExamStartRequest()
    return await exam_service.start_exam(
        current_user.id,
        time_limit=request.time_limit,
        question_count=request.question_count,
    )


@router.get("/{exam_id}", response_model=ExamResponse)
async def get_exam(
    exam_id: uuid.UUID,
    current_user: CurrentUser,
    exam_service: ExamServiceDep,
):
    """Get an exam with its saved answers."""
    return await exam_service.get_exam(current_user.id, exam_id)


@router.put("/{exam_id}/answer", response_model=AnswerSaveResponse)
async def save_answer(
    exam_id: uuid.UUID,
    request: AnswerSaveRequest,
    current_user: CurrentUser,
    exam_service: ExamServiceDep,
):
    """Save (or clear, with a null answer) one answer slot."""
    await exam_service.save_answer(
        current_user.id,
        exam_id,
        question_index=request.question_index,
        answer=request.answer,
    )
    return AnswerSaveResponse()


@router.post("/{exam_id}/submit", response_model=ExamSubmitResponse)
async def submit_exam(
    exam_id: uuid.UUID,
    current_user: CurrentUser,
    exam_service: ExamServiceDep,
):
    """
    Submit the exam.
    Used both for manual submission and for the client's timeout auto-submit.
    """
    result_id = await exam_service.submit_exam(current_user.id, exam_id)
    return ExamSubmitResponse(result_id=result_id)
