"""Script to seed the database with sample assets, projects, cases and notes"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.assignment import set_project_asset
from db_models import Asset, Case, Note, Project

SAMPLE_ASSETS = [
    ("456e7890-e89b-12d3-a456-426614174001", "Laptop Dell XPS 13",
     "Development laptop for software engineering team", 40.7128, -74.0060, "active"),
    ("456e7890-e89b-12d3-a456-426614174002", "Office Chair",
     "Ergonomic office chair for workspace comfort", 40.7580, -73.9855, "active"),
    ("456e7890-e89b-12d3-a456-426614174003", "Monitor Samsung 27\"",
     "4K monitor for development and design work", 40.7505, -73.9934, "maintenance"),
    ("456e7890-e89b-12d3-a456-426614174004", "Conference Room Projector",
     "High-resolution projector for presentations", 40.7614, -73.9776, "inactive"),
]

# (id, name, description, status, start_date, asset index or None)
SAMPLE_PROJECTS = [
    ("123e4567-e89b-12d3-a456-426614174001", "Project Alpha",
     "Mobile application development project", "active", datetime(2024, 1, 15), 0),
    ("123e4567-e89b-12d3-a456-426614174002", "Mobile App Development",
     "Cross-platform mobile app for asset tracking", "active", datetime(2024, 2, 1), 0),
    ("123e4567-e89b-12d3-a456-426614174003", "Office Setup",
     "Complete office renovation and setup", "planning", datetime(2024, 3, 1), 1),
    ("123e4567-e89b-12d3-a456-426614174004", "Hardware Upgrade",
     "Upgrade all development workstations", "on-hold", None, None),
    ("123e4567-e89b-12d3-a456-426614174005", "Display Calibration",
     "Calibrate all monitors for accurate colors", "completed", datetime(2024, 1, 1), 2),
]


def _utc(value):
    return value.replace(tzinfo=timezone.utc) if value else None


def seed_database(database_url: str):
    """Insert the sample rows unless assets already exist."""
    engine = create_engine(database_url)
    Session = sessionmaker(bind=engine)

    with Session() as session:
        existing_count = session.query(Asset).count()
        if existing_count > 0:
            print(f"Database already has {existing_count} assets, skipping seed")
            return

        assets = []
        for asset_id, name, description, lat, lng, status in SAMPLE_ASSETS:
            asset = Asset(
                id=uuid.UUID(asset_id),
                name=name,
                description=description,
                location_lat=lat,
                location_lng=lng,
                status=status,
            )
            session.add(asset)
            assets.append(asset)
        print(f"[OK] {len(assets)} assets")

        projects = []
        for project_id, name, description, status, start_date, asset_index in SAMPLE_PROJECTS:
            project = Project(
                id=uuid.UUID(project_id),
                name=name,
                description=description,
                status=status,
                start_date=_utc(start_date),
            )
            if asset_index is not None:
                set_project_asset(project, assets[asset_index].id)
            session.add(project)
            projects.append(project)
        print(f"[OK] {len(projects)} projects")

        case = Case(
            rtc="RTC Branch 12",
            case_no="CV-2024-0001",
            judge="Hon. A. Reyes",
            details="Petition for issuance of writ of possession",
            asset_id=assets[0].id,
            project_id=projects[0].id,
        )
        session.add(case)
        session.flush()

        session.add_all([
            Note(content="Initial inspection completed", asset_id=assets[0].id),
            Note(content="Kick-off meeting scheduled", project_id=projects[0].id),
            Note(content="Hearing moved to next month", case_id=case.id),
        ])
        print("[OK] 1 case, 3 notes")

        session.commit()

    engine.dispose()
    print("[OK] Seed complete")


if __name__ == "__main__":
    from config.database import get_sync_url
    from config import settings

    seed_database(get_sync_url(settings.DATABASE_URL))
