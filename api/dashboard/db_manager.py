# api/dashboard/db_manager.py
"""
Business logic for registry statistics.
"""
from sqlalchemy.ext.asyncio import AsyncSession

from . import queries


def assignment_rate(assigned: int, total: int) -> int:
    """Percentage of projects assigned, rounded; 0 when there are none."""
    if total <= 0:
        return 0
    return round(assigned / total * 100)


async def get_registry_stats(db: AsyncSession) -> dict:
    """
    Totals, assignment figures, status breakdowns and per-asset project counts.
    """
    result = await db.execute(queries.count_total_assets())
    total_assets = result.scalar() or 0

    result = await db.execute(queries.count_total_projects())
    total_projects = result.scalar() or 0

    result = await db.execute(queries.count_assigned_projects())
    assigned_projects = result.scalar() or 0

    result = await db.execute(queries.count_assets_by_status())
    assets_by_status = {status: count for status, count in result.all()}

    result = await db.execute(queries.count_projects_by_status())
    projects_by_status = {status: count for status, count in result.all()}

    result = await db.execute(queries.select_asset_project_counts())
    asset_project_counts = [
        {
            "asset": {"id": asset_id, "name": name, "status": status},
            "project_count": count,
        }
        for asset_id, name, status, count in result.all()
    ]

    return {
        "summary": {
            "total_assets": total_assets,
            "total_projects": total_projects,
            "assigned_projects": assigned_projects,
            "unassigned_projects": total_projects - assigned_projects,
            "assignment_rate": assignment_rate(assigned_projects, total_projects),
        },
        "assets_by_status": assets_by_status,
        "projects_by_status": projects_by_status,
        "assets_with_project_counts": asset_project_counts,
    }
