# api/cases/views.py
"""
Case record endpoints.
"""
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from api.common import AssetSummary, DeleteResponse, ProjectSummary, summarize
from core.deps import Pagination, not_found
from core.errors import EntityNotFoundError
from core.filters import RelationFilter
from core.validation import parse_identifier
from .models import (
    CaseListResponse,
    CaseRead,
    CaseWithLinks,
    validate_case_create,
    validate_case_update,
)
from . import db_manager

router = APIRouter(prefix="/cases", tags=["cases"])


def to_case_response(case, asset, project) -> CaseWithLinks:
    base = CaseRead.model_validate(case)
    return CaseWithLinks(
        **base.model_dump(),
        asset=summarize(AssetSummary, asset),
        project=summarize(ProjectSummary, project),
    )


@router.get(
    "",
    response_model=CaseListResponse,
    summary="List cases",
)
async def list_cases_endpoint(
    pagination: Pagination,
    search: str | None = Query(None, description="Matches case_no, rtc, judge or details"),
    asset_id: str | None = Query(None, description="Asset UUID, 'assigned' or 'unassigned'"),
    project_id: str | None = Query(None, description="Project UUID, 'assigned' or 'unassigned'"),
    db: AsyncSession = Depends(get_session),
) -> CaseListResponse:
    asset_filter = RelationFilter.parse(asset_id, "asset_id")
    project_filter = RelationFilter.parse(project_id, "project_id")

    rows, total, pages = await db_manager.list_cases(
        db,
        pagination,
        search=search,
        asset=asset_filter,
        project=project_filter,
    )

    return CaseListResponse(
        items=[to_case_response(*row) for row in rows],
        page=pagination.page,
        limit=pagination.limit,
        total=total,
        pages=pages,
    )


@router.post(
    "",
    response_model=CaseWithLinks,
    status_code=status.HTTP_201_CREATED,
    summary="Create a case",
)
async def create_case_endpoint(
    payload: Any = Body(...),
    db: AsyncSession = Depends(get_session),
) -> CaseWithLinks:
    data = validate_case_create(payload).unwrap()
    try:
        case = await db_manager.create_case(db, data)
        row = await db_manager.get_case(db, case.id)
    except EntityNotFoundError as exc:
        raise not_found(exc) from exc

    return to_case_response(*row)


@router.get(
    "/{case_id}",
    response_model=CaseWithLinks,
    summary="Get case by ID",
)
async def get_case_endpoint(
    case_id: str,
    db: AsyncSession = Depends(get_session),
) -> CaseWithLinks:
    cid = parse_identifier(case_id, "case_id")
    try:
        row = await db_manager.get_case(db, cid)
    except EntityNotFoundError as exc:
        raise not_found(exc) from exc

    return to_case_response(*row)


@router.api_route(
    "/{case_id}",
    methods=["PATCH", "PUT"],
    response_model=CaseWithLinks,
    summary="Update a case",
)
async def update_case_endpoint(
    case_id: str,
    payload: Any = Body(...),
    db: AsyncSession = Depends(get_session),
) -> CaseWithLinks:
    cid = parse_identifier(case_id, "case_id")
    data = validate_case_update(payload).unwrap()
    try:
        await db_manager.update_case(db, cid, data)
        row = await db_manager.get_case(db, cid)
    except EntityNotFoundError as exc:
        raise not_found(exc) from exc

    return to_case_response(*row)


@router.delete(
    "/{case_id}",
    response_model=DeleteResponse,
    summary="Delete a case",
)
async def delete_case_endpoint(
    case_id: str,
    db: AsyncSession = Depends(get_session),
) -> DeleteResponse:
    cid = parse_identifier(case_id, "case_id")
    try:
        await db_manager.delete_case(db, cid)
    except EntityNotFoundError as exc:
        raise not_found(exc) from exc

    return DeleteResponse(id=cid, message="Case deleted successfully")
