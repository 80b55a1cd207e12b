# api/projects/models.py
from datetime import datetime
from typing import Any, Literal
import uuid

from pydantic import BaseModel, ConfigDict, Field

from api.common import AssetSummary
from core.fields import OptionalId, OptionalText, RequiredText
from core.validation import ValidationResult, reject_nulls, validate_payload

ProjectStatusValue = Literal["planning", "active", "on-hold", "completed", "cancelled"]


class ProjectCreate(BaseModel):
    name: RequiredText = Field(..., description="Project name")
    description: OptionalText = None
    status: ProjectStatusValue = "planning"
    # assigned_at is derived from asset_id on the server, never accepted here
    asset_id: OptionalId = None
    start_date: datetime | None = None
    end_date: datetime | None = None


class ProjectUpdate(BaseModel):
    name: RequiredText | None = None
    description: OptionalText = None
    status: ProjectStatusValue | None = None
    asset_id: OptionalId = None
    start_date: datetime | None = None
    end_date: datetime | None = None


class ProjectRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: str | None = None
    status: str
    asset_id: uuid.UUID | None = None
    assigned_at: datetime | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    created_at: datetime
    updated_at: datetime


class ProjectWithAsset(ProjectRead):
    asset: AssetSummary | None = None


class ProjectListResponse(BaseModel):
    items: list[ProjectWithAsset]
    page: int
    limit: int
    total: int
    pages: int


# --- Validation entry points ---

def validate_project_create(payload: Any) -> ValidationResult[ProjectCreate]:
    return validate_payload(ProjectCreate, payload)


def validate_project_update(payload: Any) -> ValidationResult[ProjectUpdate]:
    return validate_payload(
        ProjectUpdate,
        payload,
        checks=(reject_nulls("name", "status"),),
    )
