# api/cases/models.py
from datetime import datetime
from typing import Any
import uuid

from pydantic import BaseModel, ConfigDict, Field

from api.common import AssetSummary, ProjectSummary
from core.fields import OptionalId, OptionalText, RequiredText
from core.validation import ValidationResult, reject_nulls, validate_payload


class CaseCreate(BaseModel):
    rtc: RequiredText = Field(..., description="Regional trial court")
    case_no: RequiredText = Field(..., description="Docket number")
    # Defaults to now when omitted
    last_updated_at: datetime | None = None
    judge: OptionalText = None
    details: OptionalText = None
    asset_id: OptionalId = None
    project_id: OptionalId = None


class CaseUpdate(BaseModel):
    rtc: RequiredText | None = None
    case_no: RequiredText | None = None
    last_updated_at: datetime | None = None
    judge: OptionalText = None
    details: OptionalText = None
    asset_id: OptionalId = None
    project_id: OptionalId = None


class CaseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    rtc: str
    case_no: str
    last_updated_at: datetime
    judge: str | None = None
    details: str | None = None
    asset_id: uuid.UUID | None = None
    project_id: uuid.UUID | None = None


class CaseWithLinks(CaseRead):
    asset: AssetSummary | None = None
    project: ProjectSummary | None = None


class CaseListResponse(BaseModel):
    items: list[CaseWithLinks]
    page: int
    limit: int
    total: int
    pages: int


def validate_case_create(payload: Any) -> ValidationResult[CaseCreate]:
    return validate_payload(CaseCreate, payload)


def validate_case_update(payload: Any) -> ValidationResult[CaseUpdate]:
    return validate_payload(
        CaseUpdate,
        payload,
        checks=(reject_nulls("rtc", "case_no", "last_updated_at"),),
    )
