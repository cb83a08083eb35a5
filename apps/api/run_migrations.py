#!/usr/bin/env python3
"""Database bootstrap: run Alembic migrations (production-safe).

- Wait for the database to accept connections.
- Always run `alembic upgrade head`.
- If migrations fail, fail fast (don't start with an unknown schema).
"""

import os
import sys
import time
from dotenv import load_dotenv

load_dotenv()


def check_db_ready():
    """Check if database is ready"""
    from sqlalchemy import create_engine, text
    from core.config import settings

    engine = create_engine(settings.database_url, pool_pre_ping=True)
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
    finally:
        engine.dispose()


def _get_alembic_config():
    """Load Alembic config for programmatic migrations."""
    from alembic.config import Config

    here = os.path.dirname(os.path.abspath(__file__))
    cfg = Config(os.path.join(here, "alembic.ini"))
    cfg.set_main_option("script_location", os.path.join(here, "alembic"))
    return cfg


def alembic_upgrade_head() -> None:
    """Apply all pending migrations."""
    from alembic import command

    command.upgrade(_get_alembic_config(), "head")


def seed_catalog() -> None:
    """Create placeholder workouts for schedule days that have none."""
    from core.database import get_db_sync
    from services.workout_catalog import WorkoutCatalogService

    db = get_db_sync()
    try:
        result = WorkoutCatalogService(db).seed_initial_workouts()
    finally:
        db.close()
    print(f"Workout catalog: {result['created_count']} created, {result['skipped_count']} already present")


def main(argv=None):
    import argparse

    parser = argparse.ArgumentParser(description="Wait for the database, then apply migrations.")
    parser.add_argument("--max-retries", type=int, default=30)
    parser.add_argument("--seed-catalog", action="store_true", help="Fill empty workout days after migrating")
    args = parser.parse_args(argv)

    print("Waiting for database to be ready...")
    max_retries = args.max_retries
    retry_count = 0

    while retry_count < max_retries:
        if check_db_ready():
            print("Database is ready!")
            break
        retry_count += 1
        print(f"Database is unavailable - sleeping (attempt {retry_count}/{max_retries})")
        time.sleep(1)
    else:
        print("ERROR: Database is not ready after maximum retries")
        sys.exit(1)

    try:
        alembic_upgrade_head()
    except Exception as e:
        print(f"ERROR: Alembic upgrade failed: {e}")
        sys.exit(1)
    print("Migrations completed successfully!")

    if args.seed_catalog:
        seed_catalog()


if __name__ == '__main__':
    main()
