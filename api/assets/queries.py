# api/assets/queries.py
"""
SQLAlchemy query builders for asset operations.
"""
import uuid

from sqlalchemy import select

from core.filters import combine, search_condition
from db_models.asset import Asset


def asset_filters(*, search: str | None = None, status: str | None = None):
    return combine([
        search_condition(search, Asset.name, Asset.description),
        Asset.status == status if status else None,
    ])


def select_assets():
    """Assets newest first."""
    return select(Asset).order_by(Asset.created_at.desc(), Asset.id.desc())


def select_existing_asset_ids(asset_ids: list[uuid.UUID]):
    return select(Asset.id).where(Asset.id.in_(asset_ids))
