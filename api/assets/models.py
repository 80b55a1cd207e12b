# api/assets/models.py
from datetime import datetime
from typing import Any, List, Literal
import uuid

from pydantic import BaseModel, Field

from api.common import ProjectSummary
from api.projects.models import ProjectWithAsset
from core.fields import Location, OptionalId, OptionalText, RequiredId, RequiredText
from core.validation import (
    FieldError,
    ValidationResult,
    reject_nulls,
    validate_payload,
)

AssetStatusValue = Literal["active", "inactive", "maintenance", "retired"]


class AssetAttributes(BaseModel):
    """Property and legal attributes (tax declaration, title, auction)."""

    tax_dec_no: OptionalText = None
    declared_owner: OptionalText = None
    market_value: OptionalText = None
    assessed_value: OptionalText = None
    car_status: OptionalText = None
    address: OptionalText = None
    tax_declaration_no: OptionalText = None
    tct_no: OptionalText = None
    area_per_sq_m: OptionalText = None
    location_of_property: OptionalText = None
    barangay: OptionalText = None
    bidder: OptionalText = None
    auction_date: datetime | None = None
    date_of_certification_of_sale: datetime | None = None
    entry_no: OptionalText = None
    details_short_update_log: OptionalText = None


class AssetCreate(AssetAttributes):
    name: RequiredText = Field(..., description="Asset name")
    description: RequiredText = Field(..., description="Asset description")
    location: Location
    status: AssetStatusValue = "active"

    def column_values(self) -> dict[str, Any]:
        values = self.model_dump(exclude={"location"})
        values["location_lat"] = self.location.lat
        values["location_lng"] = self.location.lng
        return values


class AssetUpdate(AssetAttributes):
    name: RequiredText | None = None
    description: RequiredText | None = None
    location: Location | None = None
    status: AssetStatusValue | None = None

    def column_changes(self) -> dict[str, Any]:
        """Only the fields the client sent, flattened to column names."""
        changes = self.model_dump(exclude_unset=True, exclude={"location"})
        if self.location is not None:
            changes["location_lat"] = self.location.lat
            changes["location_lng"] = self.location.lng
        return changes


class AssetRead(AssetAttributes):
    id: uuid.UUID
    name: str
    description: str
    location: Location
    status: str
    created_at: datetime
    updated_at: datetime
    projects: List[ProjectSummary] = []

    @classmethod
    def from_asset(cls, asset, projects=()) -> "AssetRead":
        # Columns are copied one by one; the ORM relationships are never touched
        data = {
            name: getattr(asset, name)
            for name in cls.model_fields
            if name not in ("location", "projects")
        }
        data["location"] = Location(lat=asset.location_lat, lng=asset.location_lng)
        data["projects"] = [ProjectSummary.model_validate(p) for p in projects]
        return cls(**data)


class AssetListResponse(BaseModel):
    items: List[AssetRead]
    page: int
    limit: int
    total: int
    pages: int


class AssetProjectsResponse(BaseModel):
    asset_id: uuid.UUID
    asset_name: str
    total_projects: int
    items: List[ProjectWithAsset]


# --- Bulk operations ---

class BulkAssetCreate(BaseModel):
    assets: List[AssetCreate]


class BulkAssetsResponse(BaseModel):
    items: List[AssetRead]
    message: str


class ProjectAssignment(BaseModel):
    project_id: RequiredId
    asset_id: OptionalId = None


class BulkAssignmentRequest(BaseModel):
    assignments: List[ProjectAssignment]


class BulkAssignmentResponse(BaseModel):
    items: List[ProjectWithAsset]
    message: str


class BulkDeleteResponse(BaseModel):
    ids: List[uuid.UUID]
    message: str


# --- Validation entry points ---

def validate_asset_create(payload: Any) -> ValidationResult[AssetCreate]:
    return validate_payload(AssetCreate, payload)


def validate_asset_update(payload: Any) -> ValidationResult[AssetUpdate]:
    return validate_payload(
        AssetUpdate,
        payload,
        checks=(reject_nulls("name", "description", "location", "status"),),
    )


def validate_assets_bulk(payload: Any) -> ValidationResult[BulkAssetCreate]:
    """
    Validate {"assets": [...]}. Nothing is created unless every item passes;
    errors carry the item index in their path (assets.<i>.<field>).
    """
    items = payload.get("assets") if isinstance(payload, dict) else None
    if not isinstance(items, list):
        return ValidationResult.failure(
            [FieldError(path="assets", message="Expected an array of assets")]
        )

    errors: list[FieldError] = []
    validated: list[AssetCreate] = []
    for index, item in enumerate(items):
        result = validate_asset_create(item)
        if result.ok:
            validated.append(result.value)
            continue
        errors.extend(
            FieldError(path=f"assets.{index}.{e.path}", message=e.message)
            for e in result.errors
        )

    if errors:
        return ValidationResult.failure(errors)
    return ValidationResult.success(BulkAssetCreate(assets=validated))


def validate_bulk_assignments(payload: Any) -> ValidationResult[BulkAssignmentRequest]:
    return validate_payload(BulkAssignmentRequest, payload)
