"""
Workout Catalog Service

Read and maintain the workout catalog: per-day lookup for the challenge,
listing and featured workouts for the app, and the admin operations used
to attach Vimeo videos to schedule days.
"""

from typing import Dict, List, Optional
from uuid import UUID
import logging

from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from models import Workout
from services import program_schedule
from services.vimeo import extract_vimeo_id, thumbnail_url

logger = logging.getLogger(__name__)

FEATURED_LIMIT = 10

WORKOUT_DEFAULTS = {
    "duration": 1800,
    "calories": 200,
    "rating": 4.5,
    "difficulty": "intermediate",
    "instructor": "Instructor",
    "equipment": "Bodyweight",
}


class WorkoutCatalogService:
    """Catalog access over a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    # --- Reads ---

    def list_workouts(self) -> List[Workout]:
        return (
            self.db.query(Workout)
            .order_by(Workout.day_number.asc(), Workout.created_at.asc())
            .all()
        )

    def get_workout(self, workout_id: UUID) -> Workout:
        workout = self.db.query(Workout).filter(Workout.id == workout_id).first()
        if workout is None:
            raise NotFoundError("Workout", str(workout_id))
        return workout

    def find_workout_by_day(self, day_number: int) -> Optional[Workout]:
        """Oldest workout scheduled on `day_number`, or None."""
        return (
            self.db.query(Workout)
            .filter(Workout.day_number == day_number)
            .order_by(Workout.created_at.asc(), Workout.id.asc())
            .first()
        )

    def featured_workouts(self, limit: int = FEATURED_LIMIT) -> List[Workout]:
        return (
            self.db.query(Workout)
            .order_by(Workout.rating.desc(), Workout.day_number.asc())
            .limit(limit)
            .all()
        )

    def get_workout_groups(self) -> List[Dict]:
        """
        Group scheduled workouts by title.

        Returns [{"title", "count", "days"}] sorted by title, days ascending.
        Used by the admin screen to assign one video to every day of a title.
        """
        rows = (
            self.db.query(Workout.title, Workout.day_number)
            .filter(Workout.title.isnot(None), Workout.day_number.isnot(None))
            .order_by(Workout.day_number.asc())
            .all()
        )
        groups: Dict[str, List[int]] = {}
        for title, day_number in rows:
            groups.setdefault(title, []).append(day_number)

        return [
            {"title": title, "count": len(days), "days": sorted(days)}
            for title, days in sorted(groups.items())
        ]

    # --- Writes ---

    def create_workout(self, **fields) -> Workout:
        video_url = fields.get("video_url")
        if video_url and not fields.get("vimeo_id"):
            fields["vimeo_id"] = extract_vimeo_id(video_url)
        if fields.get("vimeo_id") and not fields.get("thumbnail_url"):
            fields["thumbnail_url"] = thumbnail_url(fields["vimeo_id"])

        workout = Workout(**fields)
        self.db.add(workout)
        self.db.commit()
        self.db.refresh(workout)
        logger.info(f"Created workout {workout.id} for day {workout.day_number}: {workout.title}")
        return workout

    def update_workout(self, workout_id: UUID, **fields) -> Workout:
        workout = self.get_workout(workout_id)
        if "video_url" in fields and fields["video_url"] and "vimeo_id" not in fields:
            fields["vimeo_id"] = extract_vimeo_id(fields["video_url"])
            fields.setdefault("thumbnail_url", thumbnail_url(fields["vimeo_id"]))

        for name, value in fields.items():
            setattr(workout, name, value)
        self.db.commit()
        self.db.refresh(workout)
        return workout

    def add_vimeo_workout(
        self,
        title: str,
        vimeo_url: str,
        description: Optional[str] = None,
        day_number: Optional[int] = None,
        week_number: Optional[int] = None,
        difficulty: Optional[str] = None,
        instructor: Optional[str] = None,
        equipment: Optional[str] = None,
    ) -> Workout:
        """
        Attach a Vimeo video to the catalog.

        When `day_number` already has a workout it is updated in place,
        otherwise a new workout is created with catalog defaults.
        """
        vimeo_id = extract_vimeo_id(vimeo_url)
        fields = {
            "title": title,
            "description": description,
            "video_url": vimeo_url,
            "vimeo_id": vimeo_id,
            "thumbnail_url": thumbnail_url(vimeo_id),
            "duration": WORKOUT_DEFAULTS["duration"],
            "calories": WORKOUT_DEFAULTS["calories"],
            "rating": WORKOUT_DEFAULTS["rating"],
            "difficulty": difficulty or WORKOUT_DEFAULTS["difficulty"],
            "instructor": instructor or WORKOUT_DEFAULTS["instructor"],
            "equipment": equipment or WORKOUT_DEFAULTS["equipment"],
            "day_number": day_number,
            "week_number": week_number,
        }

        if day_number:
            existing = self.find_workout_by_day(day_number)
            if existing is not None:
                logger.info(f"Replacing video for day {day_number} (workout {existing.id})")
                return self.update_workout(existing.id, **fields)

        return self.create_workout(**fields)

    def bulk_update_workouts_by_name(self, workout_name: str, vimeo_url: str) -> Dict:
        """Point every workout titled `workout_name` at one Vimeo video."""
        vimeo_id = extract_vimeo_id(vimeo_url)
        workouts = self.db.query(Workout).filter(Workout.title == workout_name).all()
        for workout in workouts:
            workout.vimeo_id = vimeo_id
            workout.thumbnail_url = thumbnail_url(vimeo_id)
        self.db.commit()

        logger.info(f"Bulk-updated {len(workouts)} workout(s) titled '{workout_name}' to video {vimeo_id}")
        return {"updated_count": len(workouts)}

    def seed_initial_workouts(self) -> Dict:
        """Create placeholder workouts for every schedule day that has none."""
        existing_days = {
            day for (day,) in self.db.query(Workout.day_number).filter(Workout.day_number.isnot(None)).all()
        }
        created = 0
        for day_number in range(1, 91):
            if day_number in existing_days:
                continue
            fields = program_schedule.seed_workout_fields(day_number)
            fields["thumbnail_url"] = thumbnail_url(fields["vimeo_id"])
            self.db.add(Workout(**fields))
            created += 1
        self.db.commit()

        logger.info(f"Seeded {created} workout(s); {len(existing_days)} day(s) already present")
        return {"created_count": created, "skipped_count": 90 - created}

    def update_workout_titles(self) -> Dict:
        """Rename scheduled workouts to the program schedule titles."""
        updated = 0
        for day_number in range(1, 91):
            title = program_schedule.scheduled_title(day_number)
            if title is None:
                continue
            workout = self.find_workout_by_day(day_number)
            if workout is None:
                continue
            workout.title = title
            workout.description = f"{title} - 30-minute workout for day {day_number}"
            updated += 1
            logger.debug(f"Updated Day {day_number}: {title}")
        self.db.commit()
        return {"updated_count": updated}
