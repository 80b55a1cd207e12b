# api/notes/models.py
from datetime import datetime
from typing import Any
import uuid

from pydantic import BaseModel, ConfigDict

from api.common import AssetSummary, CaseSummary, ProjectSummary
from core.fields import OptionalId, RequiredText
from core.validation import (
    FieldError,
    ValidationResult,
    blank_to_none,
    reject_nulls,
    validate_payload,
)

LINK_FIELDS = ("asset_id", "project_id", "case_id")


class NoteCreate(BaseModel):
    content: RequiredText
    asset_id: OptionalId = None
    project_id: OptionalId = None
    case_id: OptionalId = None


class NoteUpdate(BaseModel):
    content: RequiredText | None = None
    asset_id: OptionalId = None
    project_id: OptionalId = None
    case_id: OptionalId = None


class NoteRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    content: str
    asset_id: uuid.UUID | None = None
    project_id: uuid.UUID | None = None
    case_id: uuid.UUID | None = None
    created_at: datetime
    updated_at: datetime


class NoteWithLinks(NoteRead):
    asset: AssetSummary | None = None
    project: ProjectSummary | None = None
    case: CaseSummary | None = None


class NoteListResponse(BaseModel):
    items: list[NoteWithLinks]
    page: int
    limit: int
    total: int
    pages: int


def _require_a_link(payload: dict) -> list[FieldError]:
    # Blank strings count as absent, matching OptionalId
    if any(blank_to_none(payload.get(name)) is not None for name in LINK_FIELDS):
        return []
    return [
        FieldError(
            path="asset_id",
            message="A note must reference at least one of asset_id, project_id or case_id",
        )
    ]


def validate_note_create(payload: Any) -> ValidationResult[NoteCreate]:
    return validate_payload(NoteCreate, payload, checks=(_require_a_link,))


def validate_note_update(payload: Any) -> ValidationResult[NoteUpdate]:
    return validate_payload(NoteUpdate, payload, checks=(reject_nulls("content"),))
