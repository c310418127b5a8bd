"""
Exam Portal - Exam Service Tests
Exercise the lifecycle engine directly against a session.
"""
import uuid

import pytest
from sqlalchemy import func, select, update

from exam_portal.core.errors import AlreadyCompleted, Forbidden, NoQuestionsAvailable, ValidationError
from exam_portal.models.exam import Exam, ExamResult
from exam_portal.models.user import User
from exam_portal.services.exam import ExamService


async def make_user(db_session, name: str = "engineuser") -> uuid.UUID:
    user = User(username=name, email=f"{name}@example.com", hashed_password="x")
    db_session.add(user)
    await db_session.flush()
    return user.id


@pytest.mark.asyncio
async def test_start_exam_without_questions(db_session):
    service = ExamService(db_session)
    user_id = await make_user(db_session)

    with pytest.raises(NoQuestionsAvailable):
        await service.start_exam(user_id)


@pytest.mark.asyncio
async def test_answer_slots_keep_exam_length(db_session, question_bank):
    service = ExamService(db_session, question_count=6, default_time_limit=15)
    user_id = await make_user(db_session)

    started = await service.start_exam(user_id)
    assert started.time_limit == 15

    await service.save_answer(user_id, started.exam_id, 5, 3)
    await service.save_answer(user_id, started.exam_id, 0, 0)

    exam = await service.get_exam(user_id, started.exam_id)
    assert exam.answers == [0, None, None, None, None, 3]
    assert len(exam.answers) == exam.total_questions == 6

    with pytest.raises(ValidationError):
        await service.save_answer(user_id, started.exam_id, 6, 0)


@pytest.mark.asyncio
async def test_ownership_is_checked(db_session, question_bank):
    service = ExamService(db_session)
    owner = await make_user(db_session, "owner")
    intruder = await make_user(db_session, "intruder")

    started = await service.start_exam(owner)

    with pytest.raises(Forbidden):
        await service.get_exam(intruder, started.exam_id)
    with pytest.raises(Forbidden):
        await service.save_answer(intruder, started.exam_id, 0, 1)


@pytest.mark.asyncio
async def test_submit_loses_to_concurrent_completion(db_session, question_bank):
    """A completion that lands first makes the later submit fail without a result."""
    service = ExamService(db_session)
    user_id = await make_user(db_session)
    started = await service.start_exam(user_id)

    await db_session.execute(
        update(Exam).where(Exam.id == started.exam_id).values(is_completed=True)
    )

    with pytest.raises(AlreadyCompleted):
        await service.submit_exam(user_id, started.exam_id)
    with pytest.raises(AlreadyCompleted):
        await service.save_answer(user_id, started.exam_id, 0, 1)

    count = await db_session.scalar(select(func.count(ExamResult.id)))
    assert count == 0


@pytest.mark.asyncio
async def test_submit_creates_single_result(db_session, question_bank):
    service = ExamService(db_session)
    user_id = await make_user(db_session)
    started = await service.start_exam(user_id)

    result_id = await service.submit_exam(user_id, started.exam_id)

    result = await db_session.get(ExamResult, result_id)
    assert result.exam_id == started.exam_id
    assert result.user_id == user_id
    assert result.total_questions == 10
    assert len(result.answers) == 10

    with pytest.raises(AlreadyCompleted):
        await service.submit_exam(user_id, started.exam_id)
