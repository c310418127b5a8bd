"""
Exam Portal - Authentication API Routes
Endpoints for registration, login, and the current user
"""
from fastapi import APIRouter, status

from exam_portal.api.deps import AuthServiceDep, CurrentUser
from exam_portal.core.errors import NotFound
from exam_portal.schemas.user import (
    AuthResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    user_data: UserCreate,
    auth_service: AuthServiceDep,
) -> AuthResponse:
    """Register a new user account and sign them in."""
    user = await auth_service.register_user(user_data)
    return auth_service.build_auth_response(user)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Authenticate user",
    description="Login with email and password to receive a 24-hour access token.",
)
async def login(
    credentials: UserLogin,
    auth_service: AuthServiceDep,
) -> AuthResponse:
    user = await auth_service.authenticate(
        email=credentials.email,
        password=credentials.password,
    )
    return auth_service.build_auth_response(user)


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user",
)
async def get_current_user_profile(
    current_user: CurrentUser,
    auth_service: AuthServiceDep,
) -> UserResponse:
    """Get the current user's stored profile."""
    user = await auth_service.get_user_by_id(current_user.id)
    if not user:
        raise NotFound("User not found")
    return UserResponse.model_validate(user)
