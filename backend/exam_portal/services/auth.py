"""
Exam Portal - Authentication Service
Business logic for user registration, login, and token issuance
"""
import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from exam_portal.core.errors import Conflict, Unauthorized
from exam_portal.core.security import TokenCodec, get_password_hash, verify_password
from exam_portal.models.user import User
from exam_portal.schemas.user import AuthResponse, UserCreate, UserResponse

logger = logging.getLogger(__name__)


class InvalidCredentialsError(Unauthorized):
    """Invalid email or password."""
    default_message = "Invalid email or password"


class EmailAlreadyRegisteredError(Conflict):
    default_message = "User already exists with this email"


class AuthService:
    """Service for authentication operations."""

    def __init__(self, db: AsyncSession, tokens: TokenCodec):
        self.db = db
        self.tokens = tokens

    async def register_user(self, user_data: UserCreate) -> User:
        """
        Register a new user.

        The lookup gives the usual error; the unique index on email decides
        between concurrent registrations.

        Raises:
            EmailAlreadyRegisteredError: If email already exists
        """
        if await self.get_user_by_email(user_data.email):
            raise EmailAlreadyRegisteredError()

        user = User(
            username=user_data.username,
            email=user_data.email,
            hashed_password=get_password_hash(user_data.password),
        )

        self.db.add(user)
        try:
            await self.db.flush()
        except IntegrityError as exc:
            logger.warning("Concurrent registration for %s lost the race", user_data.email)
            raise EmailAlreadyRegisteredError() from exc

        logger.info("Registered user %s", user.id)
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """
        Authenticate user with email and password.

        Raises:
            InvalidCredentialsError: If credentials are invalid
        """
        user = await self.get_user_by_email(email)

        if not user or not verify_password(password, user.hashed_password):
            raise InvalidCredentialsError()

        return user

    def create_token(self, user: User) -> str:
        """Issue an access token carrying the user's id, email and username."""
        return self.tokens.issue(
            str(user.id),
            claims={"email": user.email, "username": user.username},
        )

    def build_auth_response(self, user: User) -> AuthResponse:
        return AuthResponse(
            user=UserResponse.model_validate(user),
            token=self.create_token(user),
        )

    async def get_user_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.email == email)
        )
        return result.scalar_one_or_none()

    async def get_user_by_id(self, user_id: uuid.UUID) -> User | None:
        """Get user by ID."""
        return await self.db.get(User, user_id)
