# api/cases/queries.py
"""
SQLAlchemy query builders for case operations.
"""
import uuid

from sqlalchemy import select

from core.filters import RelationFilter, combine, search_condition
from db_models.asset import Asset
from db_models.case import Case
from db_models.project import Project


def case_filters(
    *,
    search: str | None = None,
    asset: RelationFilter | None = None,
    project: RelationFilter | None = None,
):
    return combine([
        search_condition(search, Case.case_no, Case.rtc, Case.judge, Case.details),
        asset.condition(Case.asset_id) if asset else None,
        project.condition(Case.project_id) if project else None,
    ])


def _select_cases_with_links():
    return (
        select(Case, Asset, Project)
        .outerjoin(Asset, Case.asset_id == Asset.id)
        .outerjoin(Project, Case.project_id == Project.id)
    )


def select_cases_with_links():
    """Cases with their asset and project, most recently updated first."""
    return _select_cases_with_links().order_by(Case.last_updated_at.desc(), Case.id.desc())


def select_case_with_links(case_id: uuid.UUID):
    return _select_cases_with_links().where(Case.id == case_id)
