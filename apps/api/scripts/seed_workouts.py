"""
Seed the workout catalog and apply the program schedule titles (ops utility).

Examples (inside api container):
  python scripts/seed_workouts.py
  python scripts/seed_workouts.py --titles --commit

Default mode is DRY_RUN (reports what would change, no DB writes). Use --commit to persist.
"""

from __future__ import annotations

import os
import sys


_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _ROOT not in sys.path:
    sys.path.insert(0, _ROOT)


def main() -> int:
    import argparse

    parser = argparse.ArgumentParser()
    parser.add_argument("--titles", action="store_true", help="Also rename workouts to the schedule titles")
    parser.add_argument("--commit", action="store_true", help="Persist changes (default: dry-run)")
    args = parser.parse_args()

    from core.database import get_db_sync
    from models import Workout
    from services import program_schedule
    from services.workout_catalog import WorkoutCatalogService

    db = get_db_sync()
    try:
        existing_days = {
            day for (day,) in db.query(Workout.day_number).filter(Workout.day_number.isnot(None)).all()
        }
        missing = [day for day in range(1, 91) if day not in existing_days]

        mode = "COMMIT" if args.commit else "DRY_RUN"
        print("MODE", mode)
        print("MISSING_DAYS", len(missing), missing[:10], "..." if len(missing) > 10 else "")

        if args.titles:
            catalog = WorkoutCatalogService(db)
            renames = []
            for day_number in sorted(existing_days):
                title = program_schedule.scheduled_title(day_number)
                workout = catalog.find_workout_by_day(day_number)
                if title and workout is not None and workout.title != title:
                    renames.append((day_number, workout.title, title))
            print("TITLE_CHANGES", len(renames))
            for day_number, before, after in renames:
                print(f"  day {day_number}: {before!r} -> {after!r}")

        if not args.commit:
            print("OK: dry-run (no changes)")
            return 0

        catalog = WorkoutCatalogService(db)
        result = catalog.seed_initial_workouts()
        print("SEEDED", result)
        if args.titles:
            print("TITLES", catalog.update_workout_titles())
        print("OK: committed")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    raise SystemExit(main())
