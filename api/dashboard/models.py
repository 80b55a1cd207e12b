# api/dashboard/models.py
"""
Pydantic models for statistics responses.
"""
from pydantic import BaseModel

from api.common import AssetSummary


class StatsSummary(BaseModel):
    """Headline totals."""
    total_assets: int
    total_projects: int
    assigned_projects: int
    unassigned_projects: int
    assignment_rate: int


class AssetProjectCount(BaseModel):
    asset: AssetSummary
    project_count: int


class RegistryStats(BaseModel):
    """Full statistics payload."""
    summary: StatsSummary
    assets_by_status: dict[str, int]
    projects_by_status: dict[str, int]
    assets_with_project_counts: list[AssetProjectCount]
