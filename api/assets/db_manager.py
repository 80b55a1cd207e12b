# api/assets/db_manager.py
"""
Business logic for assets and their project assignments.

Deleting an asset never deletes its dependents: projects are unassigned and
cases/notes lose their asset reference, all in the same transaction as the
delete itself.
"""
import uuid
from collections import defaultdict

import structlog
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from api.projects.models import ProjectCreate
from api.projects import queries as project_queries
from core.assignment import (
    Transition,
    count_notes_orphaned_by,
    detach_asset_statements,
    set_project_asset,
)
from core.errors import (
    AssetNotFoundError,
    ProjectNotAssignedError,
    ProjectNotFoundError,
)
from core.filters import PageParams, apply_where, count_query, page_count, paginate
from core.lookups import get_asset_or_raise, get_project_or_raise
from core.storage import unit_of_work
from db_models.asset import Asset
from db_models.note import Note
from db_models.project import Project
from .models import AssetCreate, AssetUpdate, ProjectAssignment
from . import queries

logger = structlog.get_logger(__name__)


async def _projects_by_asset(db: AsyncSession, asset_ids: list[uuid.UUID]) -> dict[uuid.UUID, list[Project]]:
    grouped: dict[uuid.UUID, list[Project]] = defaultdict(list)
    if not asset_ids:
        return grouped
    result = await db.execute(project_queries.select_projects_for_assets(asset_ids))
    for project in result.scalars().all():
        grouped[project.asset_id].append(project)
    return grouped


# ---------- Asset CRUD ----------

async def list_assets(
    db: AsyncSession,
    params: PageParams,
    *,
    search: str | None = None,
    status: str | None = None,
) -> tuple[list[tuple[Asset, list[Project]]], int, int]:
    """
    Return (rows, total, pages); each row pairs an asset with its projects.
    """
    condition = queries.asset_filters(search=search, status=status)

    result = await db.execute(paginate(apply_where(queries.select_assets(), condition), params))
    assets = list(result.scalars().all())

    result = await db.execute(count_query(Asset.id, condition))
    total = result.scalar() or 0

    projects = await _projects_by_asset(db, [a.id for a in assets])
    rows = [(asset, projects.get(asset.id, [])) for asset in assets]
    return rows, total, page_count(total, params.limit)


async def get_asset(db: AsyncSession, asset_id: uuid.UUID) -> tuple[Asset, list[Project]]:
    """Get an asset and its assigned projects. Raises AssetNotFoundError."""
    asset = await get_asset_or_raise(db, asset_id)
    projects = await _projects_by_asset(db, [asset.id])
    return asset, projects.get(asset.id, [])


async def create_asset(db: AsyncSession, data: AssetCreate) -> Asset:
    async with unit_of_work(db, "create_asset"):
        asset = Asset(**data.column_values())
        db.add(asset)

    await db.refresh(asset)
    logger.info("asset_created", asset_id=str(asset.id))
    return asset


async def update_asset(db: AsyncSession, asset_id: uuid.UUID, data: AssetUpdate) -> Asset:
    """
    Apply a partial update; only fields present in the payload change.

    Raises:
        AssetNotFoundError: If the asset does not exist
    """
    async with unit_of_work(db, "update_asset"):
        asset = await get_asset_or_raise(db, asset_id)
        for field_name, value in data.column_changes().items():
            setattr(asset, field_name, value)

    await db.refresh(asset)
    logger.info("asset_updated", asset_id=str(asset_id))
    return asset


async def _delete_assets(db: AsyncSession, asset_ids: list[uuid.UUID]) -> int:
    """Detach dependents then delete; must run inside a unit of work."""
    result = await db.execute(count_notes_orphaned_by(Note.asset_id, asset_ids))
    orphaned = result.scalar() or 0

    for stmt in detach_asset_statements(asset_ids):
        await db.execute(stmt)
    await db.execute(delete(Asset).where(Asset.id.in_(asset_ids)))
    return orphaned


async def delete_asset(db: AsyncSession, asset_id: uuid.UUID) -> None:
    """
    Delete an asset, unassigning its projects and clearing the asset
    reference on its cases and notes.

    Raises:
        AssetNotFoundError: If the asset does not exist
    """
    async with unit_of_work(db, "delete_asset"):
        await get_asset_or_raise(db, asset_id)
        orphaned = await _delete_assets(db, [asset_id])

    if orphaned:
        logger.warning("notes_left_without_links", asset_id=str(asset_id), count=orphaned)
    logger.info("asset_deleted", asset_id=str(asset_id))


# ---------- Asset <-> Project ----------

async def list_asset_projects(db: AsyncSession, asset_id: uuid.UUID) -> tuple[Asset, list[Project]]:
    return await get_asset(db, asset_id)


async def create_asset_project(db: AsyncSession, asset_id: uuid.UUID, data: ProjectCreate) -> Project:
    """
    Create a project already assigned to the asset.

    Raises:
        AssetNotFoundError: If the asset does not exist
    """
    async with unit_of_work(db, "create_asset_project"):
        await get_asset_or_raise(db, asset_id)
        project = Project(
            name=data.name,
            description=data.description,
            status=data.status,
            start_date=data.start_date,
            end_date=data.end_date,
        )
        set_project_asset(project, asset_id)
        db.add(project)

    await db.refresh(project)
    logger.info("project_created", project_id=str(project.id), asset_id=str(asset_id))
    return project


async def get_asset_project(db: AsyncSession, asset_id: uuid.UUID, project_id: uuid.UUID) -> Project:
    """
    Return the project only if it is assigned to the asset.

    Raises:
        AssetNotFoundError: If the asset does not exist
        ProjectNotFoundError: If the project does not exist or belongs elsewhere
    """
    await get_asset_or_raise(db, asset_id)
    project = await get_project_or_raise(db, project_id)
    if project.asset_id != asset_id:
        raise ProjectNotFoundError(project_id)
    return project


async def assign_project(db: AsyncSession, asset_id: uuid.UUID, project_id: uuid.UUID) -> Project:
    """
    Assign a project to an asset, moving it off any previous asset.
    Assigning to the current asset again leaves assigned_at untouched.

    Raises:
        AssetNotFoundError: If the asset does not exist
        ProjectNotFoundError: If the project does not exist
    """
    async with unit_of_work(db, "assign_project"):
        await get_asset_or_raise(db, asset_id)
        project = await get_project_or_raise(db, project_id)
        transition = set_project_asset(project, asset_id)

    await db.refresh(project)
    logger.info(
        "project_assigned",
        project_id=str(project_id),
        asset_id=str(asset_id),
        transition=transition.value,
    )
    return project


async def unassign_project(db: AsyncSession, asset_id: uuid.UUID, project_id: uuid.UUID) -> Project:
    """
    Remove a project from an asset.

    Raises:
        AssetNotFoundError: If the asset does not exist
        ProjectNotFoundError: If the project does not exist
        ProjectNotAssignedError: If the project is not assigned to this asset
    """
    async with unit_of_work(db, "unassign_project"):
        await get_asset_or_raise(db, asset_id)
        project = await get_project_or_raise(db, project_id)
        if project.asset_id != asset_id:
            raise ProjectNotAssignedError(project_id, asset_id)
        set_project_asset(project, None)

    await db.refresh(project)
    logger.info("project_unassigned", project_id=str(project_id), asset_id=str(asset_id))
    return project


# ---------- Bulk operations ----------

async def bulk_create_assets(db: AsyncSession, items: list[AssetCreate]) -> list[Asset]:
    async with unit_of_work(db, "bulk_create_assets"):
        assets = [Asset(**item.column_values()) for item in items]
        db.add_all(assets)

    for asset in assets:
        await db.refresh(asset)
    logger.info("assets_bulk_created", count=len(assets))
    return assets


async def bulk_assign_projects(db: AsyncSession, assignments: list[ProjectAssignment]) -> list[Project]:
    """
    Apply every assignment in one transaction; nothing changes if any
    project or asset is missing.

    Raises:
        ProjectNotFoundError: If a project does not exist
        AssetNotFoundError: If a target asset does not exist
    """
    projects: list[Project] = []
    changed = 0
    async with unit_of_work(db, "bulk_assign_projects"):
        asset_ids = {a.asset_id for a in assignments if a.asset_id is not None}
        if asset_ids:
            result = await db.execute(queries.select_existing_asset_ids(list(asset_ids)))
            missing = asset_ids - set(result.scalars().all())
            if missing:
                raise AssetNotFoundError(sorted(str(i) for i in missing)[0])

        for assignment in assignments:
            project = await get_project_or_raise(db, assignment.project_id)
            if set_project_asset(project, assignment.asset_id) is not Transition.NONE:
                changed += 1
            projects.append(project)

    for project in projects:
        await db.refresh(project)
    logger.info("projects_bulk_assigned", count=len(projects), changed=changed)
    return projects


async def bulk_delete_assets(db: AsyncSession, asset_ids: list[uuid.UUID]) -> list[uuid.UUID]:
    """
    Delete the existing assets among `asset_ids` with the same cascade as a
    single delete. Unknown ids are ignored. Returns the ids actually deleted.
    """
    async with unit_of_work(db, "bulk_delete_assets"):
        result = await db.execute(queries.select_existing_asset_ids(asset_ids))
        existing = list(result.scalars().all())
        orphaned = await _delete_assets(db, existing) if existing else 0

    if orphaned:
        logger.warning("notes_left_without_links", asset_ids=[str(i) for i in existing], count=orphaned)
    logger.info("assets_bulk_deleted", requested=len(asset_ids), deleted=len(existing))
    return existing
