# api/common.py
"""
Response models shared by several routers.
"""
import uuid

from pydantic import BaseModel, ConfigDict


class AssetSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    status: str


class ProjectSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    status: str


class CaseSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    case_no: str
    rtc: str


class DeleteResponse(BaseModel):
    id: uuid.UUID
    message: str


def summarize(model: type[BaseModel], obj):
    """Build a summary from an ORM row, passing None through for absent links."""
    return None if obj is None else model.model_validate(obj)
