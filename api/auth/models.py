# api/auth/models.py
"""
Pydantic models for user registration endpoints.
"""
from datetime import datetime
from typing import Any
import uuid

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from core.fields import RequiredText
from core.security import MAX_PASSWORD_BYTES, password_too_long
from core.validation import FieldError, ValidationResult, validate_payload


class UserCreate(BaseModel):
    """Request to register a new user."""
    email: EmailStr
    password: str = Field(..., min_length=8)
    full_name: RequiredText = Field(..., max_length=255)


class UserResponse(BaseModel):
    """User data response; the password hash is never returned."""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: str
    full_name: str
    is_active: bool
    created_at: datetime


class UserListResponse(BaseModel):
    users: list[UserResponse]
    total: int


def _password_fits_hash(payload: dict) -> list[FieldError]:
    password = payload.get("password")
    if isinstance(password, str) and password_too_long(password):
        return [FieldError(path="password", message=f"Password must be at most {MAX_PASSWORD_BYTES} bytes")]
    return []


def validate_user_create(payload: Any) -> ValidationResult[UserCreate]:
    return validate_payload(UserCreate, payload, checks=(_password_fits_hash,))
