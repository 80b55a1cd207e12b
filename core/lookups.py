# core/lookups.py
"""
Primary-key lookups that raise the matching not-found error.
"""
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import (
    AssetNotFoundError,
    CaseNotFoundError,
    NoteNotFoundError,
    ProjectNotFoundError,
)
from db_models.asset import Asset
from db_models.case import Case
from db_models.note import Note
from db_models.project import Project


async def get_asset_or_raise(db: AsyncSession, asset_id: uuid.UUID) -> Asset:
    result = await db.execute(select(Asset).where(Asset.id == asset_id))
    asset = result.scalar_one_or_none()
    if asset is None:
        raise AssetNotFoundError(asset_id)
    return asset


async def get_project_or_raise(db: AsyncSession, project_id: uuid.UUID) -> Project:
    result = await db.execute(select(Project).where(Project.id == project_id))
    project = result.scalar_one_or_none()
    if project is None:
        raise ProjectNotFoundError(project_id)
    return project


async def get_case_or_raise(db: AsyncSession, case_id: uuid.UUID) -> Case:
    result = await db.execute(select(Case).where(Case.id == case_id))
    case = result.scalar_one_or_none()
    if case is None:
        raise CaseNotFoundError(case_id)
    return case


async def get_note_or_raise(db: AsyncSession, note_id: uuid.UUID) -> Note:
    result = await db.execute(select(Note).where(Note.id == note_id))
    note = result.scalar_one_or_none()
    if note is None:
        raise NoteNotFoundError(note_id)
    return note


async def ensure_links_exist(
    db: AsyncSession,
    *,
    asset_id: uuid.UUID | None = None,
    project_id: uuid.UUID | None = None,
    case_id: uuid.UUID | None = None,
) -> None:
    """Check that every non-null foreign key target exists."""
    if asset_id is not None:
        await get_asset_or_raise(db, asset_id)
    if project_id is not None:
        await get_project_or_raise(db, project_id)
    if case_id is not None:
        await get_case_or_raise(db, case_id)
