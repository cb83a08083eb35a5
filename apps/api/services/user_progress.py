"""
User Progress Service

Maintains the per-user totals behind the progress page: workouts
completed, calories burned and the current workout streak.

A streak is the number of consecutive UTC calendar days, ending today,
with at least one completed session. Yesterday-only activity keeps the
streak alive until the end of today.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Optional
from uuid import UUID
import logging

from sqlalchemy.orm import Session

from core.clock import Clock, as_utc, utc_now
from models import UserProgress, WorkoutSession

logger = logging.getLogger(__name__)


@dataclass
class ProgressSnapshot:
    total_workouts: int = 0
    total_calories: int = 0
    workout_streak: int = 0
    updated_at: Optional[datetime] = None


def calculate_streak(completed_dates: Iterable[date], today: date) -> int:
    """
    Consecutive days with activity ending today (or yesterday).

    >>> calculate_streak([date(2024, 1, 2), date(2024, 1, 3)], date(2024, 1, 3))
    2
    """
    days = set(completed_dates)
    if today in days:
        cursor = today
    elif today - timedelta(days=1) in days:
        cursor = today - timedelta(days=1)
    else:
        return 0

    streak = 0
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


class UserProgressService:
    def __init__(self, db: Session, clock: Clock = utc_now):
        self.db = db
        self.clock = clock

    def _row(self, user_id: UUID) -> Optional[UserProgress]:
        return self.db.query(UserProgress).filter(UserProgress.user_id == user_id).first()

    def get_progress(self, user_id: UUID) -> ProgressSnapshot:
        row = self._row(user_id)
        if row is None:
            return ProgressSnapshot()
        return ProgressSnapshot(
            total_workouts=row.total_workouts or 0,
            total_calories=row.total_calories or 0,
            workout_streak=row.workout_streak or 0,
            updated_at=row.date,
        )

    def _completed_dates(self, user_id: UUID) -> Iterable[date]:
        rows = (
            self.db.query(WorkoutSession.completed_at)
            .filter(WorkoutSession.user_id == user_id, WorkoutSession.completed_at.isnot(None))
            .all()
        )
        return [as_utc(completed_at).date() for (completed_at,) in rows]

    def record_session_completion(self, user_id: UUID, calories_burned: Optional[int]) -> ProgressSnapshot:
        """
        Fold a just-completed session into the user's totals.

        Call after the session's completed_at has been flushed so the streak
        includes it.
        """
        now = self.clock()
        row = self._row(user_id)
        if row is None:
            row = UserProgress(user_id=user_id, total_workouts=0, total_calories=0, workout_streak=0)
            self.db.add(row)

        row.total_workouts = (row.total_workouts or 0) + 1
        row.total_calories = (row.total_calories or 0) + (calories_burned or 0)
        row.workout_streak = calculate_streak(self._completed_dates(user_id), as_utc(now).date())
        row.date = now

        self.db.commit()
        self.db.refresh(row)
        logger.info(
            f"Progress updated for user {user_id}: {row.total_workouts} workouts, streak {row.workout_streak}"
        )
        return self.get_progress(user_id)
