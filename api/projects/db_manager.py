# api/projects/db_manager.py
"""
Business logic for project management.

Every write path goes through `core.assignment.set_project_asset` so that
assigned_at always mirrors asset_id.
"""
import uuid

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from core.assignment import (
    count_notes_orphaned_by,
    detach_project_statements,
    set_project_asset,
)
from core.filters import PageParams, RelationFilter, count_query, apply_where, page_count, paginate
from core.errors import ProjectNotFoundError
from core.lookups import ensure_links_exist, get_asset_or_raise, get_project_or_raise
from core.storage import unit_of_work
from db_models.asset import Asset
from db_models.note import Note
from db_models.project import Project
from .models import ProjectCreate, ProjectUpdate
from . import queries

logger = structlog.get_logger(__name__)


async def list_projects(
    db: AsyncSession,
    params: PageParams,
    *,
    search: str | None = None,
    status: str | None = None,
    asset: RelationFilter | None = None,
) -> tuple[list[tuple[Project, Asset | None]], int, int]:
    """
    Return (rows, total, pages) where each row is (project, linked asset or None).
    """
    condition = queries.project_filters(search=search, status=status, asset=asset)

    stmt = paginate(apply_where(queries.select_projects_with_asset(), condition), params)
    result = await db.execute(stmt)
    rows = [(project, asset_row) for project, asset_row in result.all()]

    result = await db.execute(count_query(Project.id, condition))
    total = result.scalar() or 0

    return rows, total, page_count(total, params.limit)


async def get_project(db: AsyncSession, project_id: uuid.UUID) -> tuple[Project, Asset | None]:
    """Get a project and its linked asset. Raises ProjectNotFoundError."""
    result = await db.execute(queries.select_project_with_asset(project_id))
    row = result.one_or_none()
    if row is None:
        raise ProjectNotFoundError(project_id)
    project, asset = row
    return project, asset


async def create_project(db: AsyncSession, data: ProjectCreate) -> Project:
    """
    Create a project, assigning it when asset_id is given.

    Raises:
        AssetNotFoundError: If asset_id does not exist
    """
    async with unit_of_work(db, "create_project"):
        if data.asset_id is not None:
            await get_asset_or_raise(db, data.asset_id)

        project = Project(
            name=data.name,
            description=data.description,
            status=data.status,
            start_date=data.start_date,
            end_date=data.end_date,
        )
        set_project_asset(project, data.asset_id)
        db.add(project)

    await db.refresh(project)
    logger.info("project_created", project_id=str(project.id), asset_id=_str(project.asset_id))
    return project


async def update_project(db: AsyncSession, project_id: uuid.UUID, data: ProjectUpdate) -> Project:
    """
    Apply a partial update. Only fields present in the payload change;
    an explicit null asset_id unassigns the project.

    Raises:
        ProjectNotFoundError: If the project does not exist
        AssetNotFoundError: If the new asset_id does not exist
    """
    changes = data.model_dump(exclude_unset=True)

    async with unit_of_work(db, "update_project"):
        project = await get_project_or_raise(db, project_id)

        if "asset_id" in changes:
            target = changes.pop("asset_id")
            if target is not None:
                await ensure_links_exist(db, asset_id=target)
            transition = set_project_asset(project, target)
            logger.info(
                "project_assignment_changed",
                project_id=str(project.id),
                transition=transition.value,
                asset_id=_str(target),
            )

        for field_name, value in changes.items():
            setattr(project, field_name, value)

    await db.refresh(project)
    return project


async def delete_project(db: AsyncSession, project_id: uuid.UUID) -> Project:
    """
    Delete a project. Cases and notes referencing it keep existing with
    project_id cleared; everything happens in one transaction.

    Raises:
        ProjectNotFoundError: If the project does not exist
    """
    async with unit_of_work(db, "delete_project"):
        project = await get_project_or_raise(db, project_id)

        result = await db.execute(count_notes_orphaned_by(Note.project_id, [project_id]))
        orphaned = result.scalar() or 0

        for stmt in detach_project_statements([project_id]):
            await db.execute(stmt)
        await db.delete(project)

    if orphaned:
        logger.warning("notes_left_without_links", project_id=str(project_id), count=orphaned)
    logger.info("project_deleted", project_id=str(project_id))
    return project


def _str(value) -> str | None:
    return None if value is None else str(value)
