"""
Exam Portal - User Schemas
Pydantic schemas for registration, authentication, and profiles
"""
import uuid
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, EmailStr, Field, field_validator

from exam_portal.schemas.base import CamelModel


# ============================================================================
# Registration & Authentication
# ============================================================================

class UserCreate(BaseModel):
    """Schema for user registration."""
    username: Annotated[str, Field(min_length=3, max_length=50)]
    email: EmailStr
    password: Annotated[str, Field(min_length=6, max_length=128)]

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 3:
            raise ValueError("Username must be at least 3 characters")
        return v


class UserLogin(BaseModel):
    """Schema for user login."""
    email: EmailStr
    password: Annotated[str, Field(min_length=1)]


# ============================================================================
# Responses
# ============================================================================

class UserResponse(CamelModel):
    """Public user data."""
    id: uuid.UUID
    username: str
    email: str
    created_at: datetime


class AuthResponse(BaseModel):
    """Returned by register and login."""
    user: UserResponse
    token: str


class TokenUser(BaseModel):
    """Identity carried by a verified access token."""
    id: uuid.UUID
    email: str
    username: str
