# api/assets/views.py
"""
Asset management endpoints, including project assignment and bulk operations.
"""
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from api.common import DeleteResponse
from api.projects import db_manager as project_manager
from api.projects.models import ProjectWithAsset, validate_project_create
from api.projects.views import to_project_response
from core.deps import Pagination, not_found
from core.errors import EntityNotFoundError, ProjectNotAssignedError
from core.validation import FieldError, ValidationFailed, parse_identifier
from .models import (
    AssetListResponse,
    AssetProjectsResponse,
    AssetRead,
    AssetStatusValue,
    BulkAssetsResponse,
    BulkAssignmentResponse,
    BulkDeleteResponse,
    validate_asset_create,
    validate_asset_update,
    validate_assets_bulk,
    validate_bulk_assignments,
)
from . import db_manager

router = APIRouter(prefix="/assets", tags=["assets"])


@router.get(
    "",
    response_model=AssetListResponse,
    summary="List assets",
)
async def list_assets_endpoint(
    pagination: Pagination,
    search: str | None = Query(None, description="Matches name or description"),
    status_filter: AssetStatusValue | None = Query(None, alias="status"),
    db: AsyncSession = Depends(get_session),
) -> AssetListResponse:
    """
    List assets newest first, each with the projects assigned to it.
    """
    rows, total, pages = await db_manager.list_assets(
        db,
        pagination,
        search=search,
        status=status_filter,
    )

    return AssetListResponse(
        items=[AssetRead.from_asset(asset, projects) for asset, projects in rows],
        page=pagination.page,
        limit=pagination.limit,
        total=total,
        pages=pages,
    )


@router.post(
    "",
    response_model=AssetRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create an asset",
)
async def create_asset_endpoint(
    payload: Any = Body(...),
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    data = validate_asset_create(payload).unwrap()
    asset = await db_manager.create_asset(db, data)
    return AssetRead.from_asset(asset)


# ---------- Bulk operations (registered before /{asset_id}) ----------

@router.post(
    "/bulk",
    response_model=BulkAssetsResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create many assets",
)
async def bulk_create_assets_endpoint(
    payload: Any = Body(...),
    db: AsyncSession = Depends(get_session),
) -> BulkAssetsResponse:
    """
    Create every asset in the payload or none of them.
    """
    data = validate_assets_bulk(payload).unwrap()
    assets = await db_manager.bulk_create_assets(db, data.assets)
    return BulkAssetsResponse(
        items=[AssetRead.from_asset(asset) for asset in assets],
        message=f"{len(assets)} assets created successfully",
    )


@router.put(
    "/bulk",
    response_model=BulkAssignmentResponse,
    summary="Bulk assign projects to assets",
)
async def bulk_assign_projects_endpoint(
    payload: Any = Body(...),
    db: AsyncSession = Depends(get_session),
) -> BulkAssignmentResponse:
    """
    Apply [{project_id, asset_id | null}] assignments in one transaction.
    """
    data = validate_bulk_assignments(payload).unwrap()
    try:
        projects = await db_manager.bulk_assign_projects(db, data.assignments)
    except EntityNotFoundError as exc:
        raise not_found(exc) from exc

    items = []
    for project in projects:
        _, asset = await project_manager.get_project(db, project.id)
        items.append(to_project_response(project, asset))

    return BulkAssignmentResponse(
        items=items,
        message=f"{len(items)} project assignments updated successfully",
    )


@router.delete(
    "/bulk",
    response_model=BulkDeleteResponse,
    summary="Bulk delete assets",
)
async def bulk_delete_assets_endpoint(
    ids: str | None = Query(None, description="Comma-separated asset UUIDs"),
    db: AsyncSession = Depends(get_session),
) -> BulkDeleteResponse:
    raw_ids = [part.strip() for part in (ids or "").split(",") if part.strip()]
    if not raw_ids:
        raise ValidationFailed([FieldError(path="ids", message="Asset IDs are required")])
    asset_ids = [parse_identifier(raw, "ids") for raw in raw_ids]

    deleted = await db_manager.bulk_delete_assets(db, asset_ids)
    return BulkDeleteResponse(
        ids=deleted,
        message=f"{len(deleted)} assets deleted successfully",
    )


# ---------- Single asset ----------

@router.get(
    "/{asset_id}",
    response_model=AssetRead,
    summary="Get asset by ID",
)
async def get_asset_endpoint(
    asset_id: str,
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    aid = parse_identifier(asset_id, "asset_id")
    try:
        asset, projects = await db_manager.get_asset(db, aid)
    except EntityNotFoundError as exc:
        raise not_found(exc) from exc

    return AssetRead.from_asset(asset, projects)


@router.api_route(
    "/{asset_id}",
    methods=["PATCH", "PUT"],
    response_model=AssetRead,
    summary="Update an asset",
)
async def update_asset_endpoint(
    asset_id: str,
    payload: Any = Body(...),
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    aid = parse_identifier(asset_id, "asset_id")
    data = validate_asset_update(payload).unwrap()

    try:
        await db_manager.update_asset(db, aid, data)
        asset, projects = await db_manager.get_asset(db, aid)
    except EntityNotFoundError as exc:
        raise not_found(exc) from exc

    return AssetRead.from_asset(asset, projects)


@router.delete(
    "/{asset_id}",
    response_model=DeleteResponse,
    summary="Delete an asset",
)
async def delete_asset_endpoint(
    asset_id: str,
    db: AsyncSession = Depends(get_session),
) -> DeleteResponse:
    """
    Delete an asset. Its projects become unassigned; its cases and notes
    are kept with asset_id cleared.
    """
    aid = parse_identifier(asset_id, "asset_id")
    try:
        await db_manager.delete_asset(db, aid)
    except EntityNotFoundError as exc:
        raise not_found(exc) from exc

    return DeleteResponse(id=aid, message="Asset deleted successfully")


# ---------- Asset <-> Project ----------

@router.get(
    "/{asset_id}/projects",
    response_model=AssetProjectsResponse,
    summary="List projects assigned to an asset",
)
async def list_asset_projects_endpoint(
    asset_id: str,
    db: AsyncSession = Depends(get_session),
) -> AssetProjectsResponse:
    aid = parse_identifier(asset_id, "asset_id")
    try:
        asset, projects = await db_manager.list_asset_projects(db, aid)
    except EntityNotFoundError as exc:
        raise not_found(exc) from exc

    return AssetProjectsResponse(
        asset_id=asset.id,
        asset_name=asset.name,
        total_projects=len(projects),
        items=[to_project_response(project, asset) for project in projects],
    )


@router.post(
    "/{asset_id}/projects",
    response_model=ProjectWithAsset,
    status_code=status.HTTP_201_CREATED,
    summary="Create a project assigned to an asset",
)
async def create_asset_project_endpoint(
    asset_id: str,
    payload: Any = Body(...),
    db: AsyncSession = Depends(get_session),
) -> ProjectWithAsset:
    """
    Create a project and assign it to the asset in the path. Any asset_id
    in the body is ignored.
    """
    aid = parse_identifier(asset_id, "asset_id")
    data = validate_project_create(payload).unwrap()

    try:
        project = await db_manager.create_asset_project(db, aid, data)
        asset, _ = await db_manager.get_asset(db, aid)
    except EntityNotFoundError as exc:
        raise not_found(exc) from exc

    return to_project_response(project, asset)


@router.get(
    "/{asset_id}/projects/{project_id}",
    response_model=ProjectWithAsset,
    summary="Get a project assigned to an asset",
)
async def get_asset_project_endpoint(
    asset_id: str,
    project_id: str,
    db: AsyncSession = Depends(get_session),
) -> ProjectWithAsset:
    aid = parse_identifier(asset_id, "asset_id")
    pid = parse_identifier(project_id, "project_id")
    try:
        project = await db_manager.get_asset_project(db, aid, pid)
        asset, _ = await db_manager.get_asset(db, aid)
    except EntityNotFoundError as exc:
        raise not_found(exc) from exc

    return to_project_response(project, asset)


@router.put(
    "/{asset_id}/projects/{project_id}",
    response_model=ProjectWithAsset,
    summary="Assign a project to an asset",
)
async def assign_project_endpoint(
    asset_id: str,
    project_id: str,
    db: AsyncSession = Depends(get_session),
) -> ProjectWithAsset:
    aid = parse_identifier(asset_id, "asset_id")
    pid = parse_identifier(project_id, "project_id")
    try:
        project = await db_manager.assign_project(db, aid, pid)
        asset, _ = await db_manager.get_asset(db, aid)
    except EntityNotFoundError as exc:
        raise not_found(exc) from exc

    return to_project_response(project, asset)


@router.delete(
    "/{asset_id}/projects/{project_id}",
    response_model=ProjectWithAsset,
    summary="Unassign a project from an asset",
)
async def unassign_project_endpoint(
    asset_id: str,
    project_id: str,
    db: AsyncSession = Depends(get_session),
) -> ProjectWithAsset:
    """
    Unassign a project. Returns 409 if it is not assigned to this asset.
    """
    aid = parse_identifier(asset_id, "asset_id")
    pid = parse_identifier(project_id, "project_id")
    try:
        project = await db_manager.unassign_project(db, aid, pid)
    except EntityNotFoundError as exc:
        raise not_found(exc) from exc
    except ProjectNotAssignedError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc

    return to_project_response(project, None)
