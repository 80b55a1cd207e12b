# reset_db.py
"""
Drop the registry tables, recreate them from the ORM models and mark the
database as being at the latest Alembic revision.

Usage:
    python reset_db.py              # Reset only
    python reset_db.py --seed       # Reset + seed sample data
    python reset_db.py --seed-only  # Seed an existing schema
"""
import argparse
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import make_url

from config import settings
from config.database import get_sync_url
from db_base import Base

import db_models  # noqa: F401

ALEMBIC_INI = Path(__file__).resolve().parent / "alembic.ini"


def describe_tables(engine) -> None:
    inspector = inspect(engine)
    for table in sorted(inspector.get_table_names()):
        columns = ", ".join(c["name"] for c in inspector.get_columns(table))
        print(f"  {table}: {columns}")


def stamp_head() -> None:
    """Record the fresh schema as the latest migration so `alembic upgrade` is a no-op."""
    command.stamp(Config(str(ALEMBIC_INI)), "head")


def reset_database(sync_url: str) -> None:
    print(f"Resetting {make_url(sync_url).render_as_string(hide_password=True)}")

    engine = create_engine(sync_url)
    try:
        existing = inspect(engine).get_table_names()
        print(f"Found {len(existing)} existing tables")

        Base.metadata.drop_all(bind=engine)
        Base.metadata.create_all(bind=engine)

        print("Created:")
        describe_tables(engine)
    finally:
        engine.dispose()

    stamp_head()
    print("[OK] Reset complete")


def main():
    parser = argparse.ArgumentParser(description="Recreate the registry schema")
    parser.add_argument("--seed", action="store_true", help="Seed sample data after the reset")
    parser.add_argument("--seed-only", action="store_true", help="Seed without resetting")
    args = parser.parse_args()

    sync_url = get_sync_url(settings.DATABASE_URL)

    if not args.seed_only:
        reset_database(sync_url)

    if args.seed or args.seed_only:
        from seed_database import seed_database
        seed_database(sync_url)


if __name__ == "__main__":
    main()
