# api/dashboard/views.py
"""
Aggregate statistics endpoints.

Mounted under /assets, so this router must be included before the assets
router or /assets/stats would be captured by /assets/{asset_id}.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from .models import RegistryStats
from . import db_manager

router = APIRouter(prefix="/assets", tags=["dashboard"])


@router.get(
    "/stats",
    response_model=RegistryStats,
    summary="Get asset and project statistics",
)
async def get_stats_endpoint(
    db: AsyncSession = Depends(get_session),
) -> RegistryStats:
    """
    Asset and project totals, assignment rate, counts by status and the
    number of projects on each asset.
    """
    stats = await db_manager.get_registry_stats(db)
    return RegistryStats(**stats)
