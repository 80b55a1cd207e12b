# api/auth/views.py
"""
User registration endpoints.
"""
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.errors import DuplicateEmailError
from core.filters import MAX_LIMIT, MAX_PAGE
from .models import UserListResponse, UserResponse, validate_user_create
from . import db_manager


router = APIRouter(prefix="/auth", tags=["authentication"])

MAX_SKIP = MAX_PAGE * MAX_LIMIT


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user",
)
async def register(
    payload: Any = Body(...),
    db: AsyncSession = Depends(get_session),
) -> UserResponse:
    data = validate_user_create(payload).unwrap()
    try:
        user = await db_manager.register_user(db, data)
    except DuplicateEmailError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered",
        ) from exc

    return UserResponse.model_validate(user)


@router.get("/users", response_model=UserListResponse, summary="List users")
async def list_users(
    db: AsyncSession = Depends(get_session),
    skip: int = Query(0, ge=0, le=MAX_SKIP),
    limit: int = Query(100, ge=1, le=MAX_LIMIT),
) -> UserListResponse:
    users, total = await db_manager.list_users(db, skip=skip, limit=limit)
    return UserListResponse(
        users=[UserResponse.model_validate(u) for u in users],
        total=total,
    )
