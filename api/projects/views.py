# api/projects/views.py
"""
Project management endpoints.
"""
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from api.common import AssetSummary, DeleteResponse, summarize
from core.deps import Pagination, not_found
from core.errors import EntityNotFoundError
from core.filters import RelationFilter
from core.validation import parse_identifier
from .models import (
    ProjectListResponse,
    ProjectRead,
    ProjectStatusValue,
    ProjectWithAsset,
    validate_project_create,
    validate_project_update,
)
from . import db_manager

router = APIRouter(prefix="/projects", tags=["projects"])


def to_project_response(project, asset) -> ProjectWithAsset:
    # Validate the plain columns first so the ORM relationship is never touched
    base = ProjectRead.model_validate(project)
    return ProjectWithAsset(**base.model_dump(), asset=summarize(AssetSummary, asset))


@router.get(
    "",
    response_model=ProjectListResponse,
    summary="List projects",
)
async def list_projects_endpoint(
    pagination: Pagination,
    search: str | None = Query(None, description="Matches name or description"),
    status_filter: ProjectStatusValue | None = Query(None, alias="status"),
    asset_id: str | None = Query(
        None,
        description="Asset UUID, 'assigned' or 'unassigned'",
    ),
    db: AsyncSession = Depends(get_session),
) -> ProjectListResponse:
    """
    List projects newest first, each with a summary of its assigned asset.
    """
    asset_filter = RelationFilter.parse(asset_id, "asset_id")

    rows, total, pages = await db_manager.list_projects(
        db,
        pagination,
        search=search,
        status=status_filter,
        asset=asset_filter,
    )

    return ProjectListResponse(
        items=[to_project_response(project, asset) for project, asset in rows],
        page=pagination.page,
        limit=pagination.limit,
        total=total,
        pages=pages,
    )


@router.post(
    "",
    response_model=ProjectWithAsset,
    status_code=status.HTTP_201_CREATED,
    summary="Create a project",
)
async def create_project_endpoint(
    payload: Any = Body(...),
    db: AsyncSession = Depends(get_session),
) -> ProjectWithAsset:
    """
    Create a project. Supplying asset_id assigns it immediately.
    """
    data = validate_project_create(payload).unwrap()

    try:
        project = await db_manager.create_project(db, data)
        project, asset = await db_manager.get_project(db, project.id)
    except EntityNotFoundError as exc:
        raise not_found(exc) from exc

    return to_project_response(project, asset)


@router.get(
    "/{project_id}",
    response_model=ProjectWithAsset,
    summary="Get project by ID",
)
async def get_project_endpoint(
    project_id: str,
    db: AsyncSession = Depends(get_session),
) -> ProjectWithAsset:
    pid = parse_identifier(project_id, "project_id")
    try:
        project, asset = await db_manager.get_project(db, pid)
    except EntityNotFoundError as exc:
        raise not_found(exc) from exc

    return to_project_response(project, asset)


@router.api_route(
    "/{project_id}",
    methods=["PATCH", "PUT"],
    response_model=ProjectWithAsset,
    summary="Update a project",
)
async def update_project_endpoint(
    project_id: str,
    payload: Any = Body(...),
    db: AsyncSession = Depends(get_session),
) -> ProjectWithAsset:
    """
    Partially update a project. Changing asset_id assigns, reassigns or
    (with null) unassigns it.
    """
    pid = parse_identifier(project_id, "project_id")
    data = validate_project_update(payload).unwrap()

    try:
        await db_manager.update_project(db, pid, data)
        project, asset = await db_manager.get_project(db, pid)
    except EntityNotFoundError as exc:
        raise not_found(exc) from exc

    return to_project_response(project, asset)


@router.delete(
    "/{project_id}",
    response_model=DeleteResponse,
    summary="Delete a project",
)
async def delete_project_endpoint(
    project_id: str,
    db: AsyncSession = Depends(get_session),
) -> DeleteResponse:
    """
    Delete a project. Linked cases and notes are kept with project_id cleared.
    """
    pid = parse_identifier(project_id, "project_id")
    try:
        await db_manager.delete_project(db, pid)
    except EntityNotFoundError as exc:
        raise not_found(exc) from exc

    return DeleteResponse(id=pid, message="Project deleted successfully")
