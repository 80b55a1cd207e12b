# api/notes/db_manager.py
"""
Business logic for notes.

The at-least-one-link rule is checked by `validate_note_create`; updates and
parent deletes may leave a note with no links at all.
"""
import uuid

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import NoteNotFoundError
from core.filters import PageParams, RelationFilter, apply_where, count_query, page_count, paginate
from core.lookups import ensure_links_exist, get_note_or_raise
from core.storage import unit_of_work
from db_models.asset import Asset
from db_models.case import Case
from db_models.note import Note
from db_models.project import Project
from .models import NoteCreate, NoteUpdate
from . import queries

logger = structlog.get_logger(__name__)

NoteRow = tuple[Note, Asset | None, Project | None, Case | None]


async def list_notes(
    db: AsyncSession,
    params: PageParams,
    *,
    search: str | None = None,
    asset: RelationFilter | None = None,
    project: RelationFilter | None = None,
    case: RelationFilter | None = None,
) -> tuple[list[NoteRow], int, int]:
    condition = queries.note_filters(search=search, asset=asset, project=project, case=case)

    result = await db.execute(
        paginate(apply_where(queries.select_notes_with_links(), condition), params)
    )
    rows = [tuple(row) for row in result.all()]

    result = await db.execute(count_query(Note.id, condition))
    total = result.scalar() or 0

    return rows, total, page_count(total, params.limit)


async def get_note(db: AsyncSession, note_id: uuid.UUID) -> NoteRow:
    result = await db.execute(queries.select_note_with_links(note_id))
    row = result.one_or_none()
    if row is None:
        raise NoteNotFoundError(note_id)
    note, asset, project, case = row
    return note, asset, project, case


async def create_note(db: AsyncSession, data: NoteCreate) -> Note:
    """
    Raises:
        AssetNotFoundError / ProjectNotFoundError / CaseNotFoundError:
            If a linked row is missing
    """
    async with unit_of_work(db, "create_note"):
        await ensure_links_exist(
            db,
            asset_id=data.asset_id,
            project_id=data.project_id,
            case_id=data.case_id,
        )
        note = Note(
            content=data.content,
            asset_id=data.asset_id,
            project_id=data.project_id,
            case_id=data.case_id,
        )
        db.add(note)

    await db.refresh(note)
    logger.info("note_created", note_id=str(note.id))
    return note


async def update_note(db: AsyncSession, note_id: uuid.UUID, data: NoteUpdate) -> Note:
    changes = data.model_dump(exclude_unset=True)

    async with unit_of_work(db, "update_note"):
        note = await get_note_or_raise(db, note_id)
        await ensure_links_exist(
            db,
            asset_id=changes.get("asset_id"),
            project_id=changes.get("project_id"),
            case_id=changes.get("case_id"),
        )
        for field_name, value in changes.items():
            setattr(note, field_name, value)

    await db.refresh(note)
    if note.is_orphaned:
        logger.warning("note_left_without_links", note_id=str(note_id))
    logger.info("note_updated", note_id=str(note_id), fields=sorted(changes))
    return note


async def delete_note(db: AsyncSession, note_id: uuid.UUID) -> None:
    async with unit_of_work(db, "delete_note"):
        note = await get_note_or_raise(db, note_id)
        await db.delete(note)

    logger.info("note_deleted", note_id=str(note_id))
