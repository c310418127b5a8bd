"""
Exam Portal - API Dependencies
FastAPI dependencies for authentication and service construction
"""
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from exam_portal.core.config import Settings
from exam_portal.core.database import get_db
from exam_portal.core.errors import Forbidden, Unauthorized
from exam_portal.core.security import TokenCodec
from exam_portal.schemas.user import TokenUser
from exam_portal.services.auth import AuthService
from exam_portal.services.exam import ExamService
from exam_portal.services.results import ResultService

# Missing credentials are reported by get_current_user, not by the scheme
security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


AppSettings = Annotated[Settings, Depends(get_app_settings)]


def get_token_codec(settings: AppSettings) -> TokenCodec:
    return TokenCodec.from_settings(settings)


Tokens = Annotated[TokenCodec, Depends(get_token_codec)]


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Tokens,
) -> TokenUser:
    """
    Identity from the bearer token. Claims are trusted without a database read.

    Raises:
        Unauthorized: If no token was presented
        Forbidden: If the token is invalid or expired
    """
    if credentials is None:
        raise Unauthorized()

    payload = tokens.verify(credentials.credentials)
    if payload is None:
        raise Forbidden("Invalid or expired token")

    try:
        return TokenUser(
            id=payload.get("sub"),
            email=payload.get("email"),
            username=payload.get("username"),
        )
    except PydanticValidationError:
        raise Forbidden("Invalid or expired token")


# Type aliases for common dependencies
CurrentUser = Annotated[TokenUser, Depends(get_current_user)]
DbSession = Annotated[AsyncSession, Depends(get_db)]


def get_auth_service(db: DbSession, tokens: Tokens) -> AuthService:
    return AuthService(db, tokens)


def get_exam_service(db: DbSession, settings: AppSettings) -> ExamService:
    return ExamService(
        db,
        question_count=settings.EXAM_QUESTION_COUNT,
        default_time_limit=settings.DEFAULT_TIME_LIMIT_MINUTES,
    )


def get_result_service(db: DbSession) -> ResultService:
    return ResultService(db)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
ExamServiceDep = Annotated[ExamService, Depends(get_exam_service)]
ResultServiceDep = Annotated[ResultService, Depends(get_result_service)]
