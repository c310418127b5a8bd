"""
Exam Portal - Test Configuration
Pytest fixtures and configuration for testing
"""
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import NullPool

from exam_portal.core.database import Database
from exam_portal.main import app
from exam_portal.scripts.seed_questions import add_questions


# Test database URL (use SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///./test.db"

# NullPool: every test runs on its own event loop
test_database = Database(TEST_DATABASE_URL, poolclass=NullPool)

# Correct answers keyed by question text, for scoring assertions
KNOWN_QUESTIONS = [
    {
        "question": f"Sample question {i}",
        "options": ["A", "B", "C", "D"],
        "correct_answer": i % 4,
        "difficulty": "easy",
        "subject": "Testing",
    }
    for i in range(12)
]


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create fresh tables and a session for each test."""
    await test_database.create_all()

    async with test_database.session_maker() as session:
        yield session

    await test_database.drop_all()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client whose requests use the test database."""
    async with app_client(app) as ac:
        yield ac


@asynccontextmanager
async def app_client(application: FastAPI) -> AsyncIterator[AsyncClient]:
    """Client for an app wired to the test database (the lifespan is not run)."""
    application.state.database = test_database
    async with AsyncClient(
        transport=ASGITransport(app=application),
        base_url="http://test"
    ) as ac:
        yield ac


async def seed_bank(session: AsyncSession, items: list[dict]) -> dict[str, int]:
    """Insert questions and return {question text: correct answer}."""
    questions = await add_questions(session, items)
    await session.commit()
    return {q.question: q.correct_answer for q in questions}


@pytest_asyncio.fixture
async def question_bank(db_session: AsyncSession) -> dict[str, int]:
    """Twelve questions with known correct answers."""
    return await seed_bank(db_session, KNOWN_QUESTIONS)


@pytest.fixture
def sample_user_data() -> dict[str, Any]:
    """Sample user registration data."""
    return {
        "username": "testuser",
        "email": "test@example.com",
        "password": "TestPass123!",
    }


async def register(client: AsyncClient, username: str, email: str, password: str = "TestPass123!") -> dict[str, str]:
    """Register a user and return auth headers."""
    response = await client.post("/api/auth/register", json={
        "username": username,
        "email": email,
        "password": password,
    })
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest_asyncio.fixture
async def auth_headers(client: AsyncClient, sample_user_data) -> dict[str, str]:
    return await register(client, **sample_user_data)


@pytest_asyncio.fixture
async def other_auth_headers(client: AsyncClient) -> dict[str, str]:
    return await register(client, "otheruser", "other@example.com")
