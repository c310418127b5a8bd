"""
Exam Portal - Authentication API Tests
"""
from datetime import timedelta

import pytest
from httpx import AsyncClient

from exam_portal.core.security import TokenCodec
from exam_portal.main import app
from exam_portal.services.auth import AuthService


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    """Test the health check endpoint."""
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"


@pytest.mark.asyncio
async def test_register_user(client: AsyncClient, sample_user_data):
    """Test user registration."""
    response = await client.post("/api/auth/register", json=sample_user_data)
    assert response.status_code == 201
    data = response.json()
    assert data["user"]["email"] == sample_user_data["email"]
    assert data["user"]["username"] == sample_user_data["username"]
    assert "id" in data["user"]
    assert "createdAt" in data["user"]
    assert "password" not in data["user"]
    assert "hashedPassword" not in data["user"]
    assert data["token"]


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient, sample_user_data):
    """Test that duplicate email registration fails."""
    await client.post("/api/auth/register", json=sample_user_data)

    response = await client.post("/api/auth/register", json=sample_user_data)
    assert response.status_code == 400
    assert "already exists" in response.json()["message"].lower()


@pytest.mark.asyncio
async def test_register_duplicate_email_decided_by_unique_index(
    client: AsyncClient, sample_user_data, monkeypatch
):
    """A registration that passes the lookup still gets 400 from the unique email index."""
    await client.post("/api/auth/register", json=sample_user_data)

    async def lookup_misses(self, email):
        return None

    monkeypatch.setattr(AuthService, "get_user_by_email", lookup_misses)

    response = await client.post(
        "/api/auth/register",
        json={**sample_user_data, "username": "seconduser"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "User already exists with this email"


@pytest.mark.asyncio
async def test_register_rejects_short_password(client: AsyncClient, sample_user_data):
    response = await client.post(
        "/api/auth/register",
        json={**sample_user_data, "password": "abc"},
    )
    assert response.status_code == 400
    assert "password" in response.json()["message"]


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, sample_user_data):
    """Test successful login."""
    await client.post("/api/auth/register", json=sample_user_data)

    response = await client.post("/api/auth/login", json={
        "email": sample_user_data["email"],
        "password": sample_user_data["password"],
    })
    assert response.status_code == 200
    data = response.json()
    assert data["token"]
    assert data["user"]["email"] == sample_user_data["email"]


@pytest.mark.asyncio
async def test_login_invalid_credentials(client: AsyncClient, sample_user_data):
    """Test login with invalid credentials."""
    await client.post("/api/auth/register", json=sample_user_data)

    response = await client.post("/api/auth/login", json={
        "email": sample_user_data["email"],
        "password": "WrongPassword123!",
    })
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_login_unknown_email(client: AsyncClient):
    response = await client.post("/api/auth/login", json={
        "email": "nobody@example.com",
        "password": "whatever",
    })
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_get_current_user(client: AsyncClient, sample_user_data, auth_headers):
    """Test getting current user profile."""
    response = await client.get("/api/auth/me", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["email"] == sample_user_data["email"]
    assert data["username"] == sample_user_data["username"]


@pytest.mark.asyncio
async def test_missing_token_is_unauthorized(client: AsyncClient):
    response = await client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json()["message"] == "Access token required"


@pytest.mark.asyncio
async def test_invalid_token_is_forbidden(client: AsyncClient):
    response = await client.get(
        "/api/auth/me",
        headers={"Authorization": "Bearer not-a-real-token"}
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_expired_token_is_forbidden(client: AsyncClient, sample_user_data):
    register_response = await client.post("/api/auth/register", json=sample_user_data)
    user = register_response.json()["user"]

    token = TokenCodec.from_settings(app.state.settings).issue(
        user["id"],
        claims={"email": user["email"], "username": user["username"]},
        lifetime=timedelta(minutes=-1),
    )
    response = await client.get("/api/results", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403
