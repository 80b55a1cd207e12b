# api/projects/queries.py
"""
SQLAlchemy query builders for project operations.
"""
import uuid

from sqlalchemy import select

from core.filters import RelationFilter, combine, search_condition
from db_models.asset import Asset
from db_models.project import Project


def project_filters(
    *,
    search: str | None = None,
    status: str | None = None,
    asset: RelationFilter | None = None,
):
    """AND of the supplied list filters (None when nothing applies)."""
    return combine([
        search_condition(search, Project.name, Project.description),
        Project.status == status if status else None,
        asset.condition(Project.asset_id) if asset else None,
    ])


def select_projects_with_asset():
    """Projects left-outer-joined to their asset, newest first."""
    return (
        select(Project, Asset)
        .outerjoin(Asset, Project.asset_id == Asset.id)
        .order_by(Project.created_at.desc(), Project.id.desc())
    )


def select_project_with_asset(project_id: uuid.UUID):
    return (
        select(Project, Asset)
        .outerjoin(Asset, Project.asset_id == Asset.id)
        .where(Project.id == project_id)
    )


def select_projects_for_assets(asset_ids: list[uuid.UUID]):
    return (
        select(Project)
        .where(Project.asset_id.in_(asset_ids))
        .order_by(Project.created_at.desc(), Project.id.desc())
    )
