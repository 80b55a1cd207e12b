# api/auth/db_manager.py
"""
Business logic for user accounts.
"""
import structlog
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import DuplicateEmailError
from core.security import hash_password
from core.storage import unit_of_work
from db_models.user import User
from .models import UserCreate

logger = structlog.get_logger(__name__)


async def register_user(db: AsyncSession, data: UserCreate) -> User:
    """
    Create a user with a bcrypt-hashed password.

    Raises:
        DuplicateEmailError: If the email is already registered
    """
    email = data.email.lower()

    async with unit_of_work(db, "register_user"):
        result = await db.execute(select(User).where(func.lower(User.email) == email))
        if result.scalar_one_or_none() is not None:
            raise DuplicateEmailError(email)

        user = User(
            email=email,
            hashed_password=hash_password(data.password),
            full_name=data.full_name,
            is_active=True,
        )
        db.add(user)

    await db.refresh(user)
    logger.info("user_registered", user_id=str(user.id))
    return user


async def list_users(db: AsyncSession, skip: int = 0, limit: int = 100) -> tuple[list[User], int]:
    result = await db.execute(select(func.count(User.id)))
    total = result.scalar() or 0

    stmt = select(User).order_by(User.created_at.desc()).offset(skip).limit(limit)
    result = await db.execute(stmt)
    return list(result.scalars().all()), total
