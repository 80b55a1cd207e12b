# api/notes/views.py
"""
Note endpoints.
"""
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from api.common import AssetSummary, CaseSummary, DeleteResponse, ProjectSummary, summarize
from core.deps import Pagination, not_found
from core.errors import EntityNotFoundError
from core.filters import RelationFilter
from core.validation import parse_identifier
from .models import (
    NoteListResponse,
    NoteRead,
    NoteWithLinks,
    validate_note_create,
    validate_note_update,
)
from . import db_manager

router = APIRouter(prefix="/notes", tags=["notes"])


def to_note_response(note, asset, project, case) -> NoteWithLinks:
    base = NoteRead.model_validate(note)
    return NoteWithLinks(
        **base.model_dump(),
        asset=summarize(AssetSummary, asset),
        project=summarize(ProjectSummary, project),
        case=summarize(CaseSummary, case),
    )


@router.get(
    "",
    response_model=NoteListResponse,
    summary="List notes",
)
async def list_notes_endpoint(
    pagination: Pagination,
    search: str | None = Query(None, description="Matches note content"),
    asset_id: str | None = Query(None, description="Asset UUID, 'assigned' or 'unassigned'"),
    project_id: str | None = Query(None, description="Project UUID, 'assigned' or 'unassigned'"),
    case_id: str | None = Query(None, description="Case UUID, 'assigned' or 'unassigned'"),
    db: AsyncSession = Depends(get_session),
) -> NoteListResponse:
    rows, total, pages = await db_manager.list_notes(
        db,
        pagination,
        search=search,
        asset=RelationFilter.parse(asset_id, "asset_id"),
        project=RelationFilter.parse(project_id, "project_id"),
        case=RelationFilter.parse(case_id, "case_id"),
    )

    return NoteListResponse(
        items=[to_note_response(*row) for row in rows],
        page=pagination.page,
        limit=pagination.limit,
        total=total,
        pages=pages,
    )


@router.post(
    "",
    response_model=NoteWithLinks,
    status_code=status.HTTP_201_CREATED,
    summary="Create a note",
)
async def create_note_endpoint(
    payload: Any = Body(...),
    db: AsyncSession = Depends(get_session),
) -> NoteWithLinks:
    """
    Create a note attached to at least one asset, project or case.
    """
    data = validate_note_create(payload).unwrap()
    try:
        note = await db_manager.create_note(db, data)
        row = await db_manager.get_note(db, note.id)
    except EntityNotFoundError as exc:
        raise not_found(exc) from exc

    return to_note_response(*row)


@router.get(
    "/{note_id}",
    response_model=NoteWithLinks,
    summary="Get note by ID",
)
async def get_note_endpoint(
    note_id: str,
    db: AsyncSession = Depends(get_session),
) -> NoteWithLinks:
    nid = parse_identifier(note_id, "note_id")
    try:
        row = await db_manager.get_note(db, nid)
    except EntityNotFoundError as exc:
        raise not_found(exc) from exc

    return to_note_response(*row)


@router.api_route(
    "/{note_id}",
    methods=["PATCH", "PUT"],
    response_model=NoteWithLinks,
    summary="Update a note",
)
async def update_note_endpoint(
    note_id: str,
    payload: Any = Body(...),
    db: AsyncSession = Depends(get_session),
) -> NoteWithLinks:
    nid = parse_identifier(note_id, "note_id")
    data = validate_note_update(payload).unwrap()
    try:
        await db_manager.update_note(db, nid, data)
        row = await db_manager.get_note(db, nid)
    except EntityNotFoundError as exc:
        raise not_found(exc) from exc

    return to_note_response(*row)


@router.delete(
    "/{note_id}",
    response_model=DeleteResponse,
    summary="Delete a note",
)
async def delete_note_endpoint(
    note_id: str,
    db: AsyncSession = Depends(get_session),
) -> DeleteResponse:
    nid = parse_identifier(note_id, "note_id")
    try:
        await db_manager.delete_note(db, nid)
    except EntityNotFoundError as exc:
        raise not_found(exc) from exc

    return DeleteResponse(id=nid, message="Note deleted successfully")
