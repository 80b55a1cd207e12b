# api/cases/db_manager.py
"""
Business logic for case records.
"""
import uuid

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from core.assignment import count_notes_orphaned_by, detach_case_statements
from core.errors import CaseNotFoundError
from core.filters import PageParams, RelationFilter, apply_where, count_query, page_count, paginate
from core.lookups import ensure_links_exist, get_case_or_raise
from core.storage import unit_of_work
from db_base import utcnow
from db_models.asset import Asset
from db_models.case import Case
from db_models.note import Note
from db_models.project import Project
from .models import CaseCreate, CaseUpdate
from . import queries

logger = structlog.get_logger(__name__)

CaseRow = tuple[Case, Asset | None, Project | None]


async def list_cases(
    db: AsyncSession,
    params: PageParams,
    *,
    search: str | None = None,
    asset: RelationFilter | None = None,
    project: RelationFilter | None = None,
) -> tuple[list[CaseRow], int, int]:
    condition = queries.case_filters(search=search, asset=asset, project=project)

    result = await db.execute(
        paginate(apply_where(queries.select_cases_with_links(), condition), params)
    )
    rows = [tuple(row) for row in result.all()]

    result = await db.execute(count_query(Case.id, condition))
    total = result.scalar() or 0

    return rows, total, page_count(total, params.limit)


async def get_case(db: AsyncSession, case_id: uuid.UUID) -> CaseRow:
    """Get a case with its asset and project. Raises CaseNotFoundError."""
    result = await db.execute(queries.select_case_with_links(case_id))
    row = result.one_or_none()
    if row is None:
        raise CaseNotFoundError(case_id)
    case, asset, project = row
    return case, asset, project


async def create_case(db: AsyncSession, data: CaseCreate) -> Case:
    """
    Raises:
        AssetNotFoundError / ProjectNotFoundError: If a linked row is missing
    """
    async with unit_of_work(db, "create_case"):
        await ensure_links_exist(db, asset_id=data.asset_id, project_id=data.project_id)
        case = Case(
            rtc=data.rtc,
            case_no=data.case_no,
            last_updated_at=data.last_updated_at or utcnow(),
            judge=data.judge,
            details=data.details,
            asset_id=data.asset_id,
            project_id=data.project_id,
        )
        db.add(case)

    await db.refresh(case)
    logger.info("case_created", case_id=str(case.id), case_no=case.case_no)
    return case


async def update_case(db: AsyncSession, case_id: uuid.UUID, data: CaseUpdate) -> Case:
    changes = data.model_dump(exclude_unset=True)

    async with unit_of_work(db, "update_case"):
        case = await get_case_or_raise(db, case_id)
        await ensure_links_exist(
            db,
            asset_id=changes.get("asset_id"),
            project_id=changes.get("project_id"),
        )
        for field_name, value in changes.items():
            setattr(case, field_name, value)

    await db.refresh(case)
    logger.info("case_updated", case_id=str(case_id), fields=sorted(changes))
    return case


async def delete_case(db: AsyncSession, case_id: uuid.UUID) -> None:
    """
    Delete a case; notes attached to it are kept with case_id cleared.

    Raises:
        CaseNotFoundError: If the case does not exist
    """
    async with unit_of_work(db, "delete_case"):
        case = await get_case_or_raise(db, case_id)

        result = await db.execute(count_notes_orphaned_by(Note.case_id, [case_id]))
        orphaned = result.scalar() or 0

        for stmt in detach_case_statements([case_id]):
            await db.execute(stmt)
        await db.delete(case)

    if orphaned:
        logger.warning("notes_left_without_links", case_id=str(case_id), count=orphaned)
    logger.info("case_deleted", case_id=str(case_id))
