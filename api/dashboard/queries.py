# api/dashboard/queries.py
"""
SQLAlchemy query builders for registry statistics.
"""
from sqlalchemy import select, func

from db_models.asset import Asset
from db_models.project import Project


def count_total_assets():
    """Count total assets."""
    return select(func.count(Asset.id))


def count_total_projects():
    """Count total projects."""
    return select(func.count(Project.id))


def count_assigned_projects():
    """Count projects linked to an asset."""
    return select(func.count(Project.id)).where(Project.asset_id.is_not(None))


def count_assets_by_status():
    return select(Asset.status, func.count(Asset.id)).group_by(Asset.status)


def count_projects_by_status():
    return select(Project.status, func.count(Project.id)).group_by(Project.status)


def select_asset_project_counts():
    """
    Every asset with the number of projects assigned to it (zero included).
    """
    return (
        select(Asset.id, Asset.name, Asset.status, func.count(Project.id))
        .outerjoin(Project, Project.asset_id == Asset.id)
        .group_by(Asset.id, Asset.name, Asset.status)
        .order_by(Asset.name)
    )
