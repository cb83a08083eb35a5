"""
Workout Session Service

Session lifecycle (start -> complete) and the exercise sets logged
inside a session. Every lookup is scoped to the owning user; another
user's session reads as not found.
"""

from typing import List, Optional
from uuid import UUID
import logging

from sqlalchemy.orm import Session

from core.clock import Clock, utc_now
from core.exceptions import NotFoundError, SessionAlreadyCompletedError
from models import ExerciseSet, Workout, WorkoutSession
from services.user_progress import UserProgressService

logger = logging.getLogger(__name__)


class WorkoutSessionService:
    def __init__(self, db: Session, clock: Clock = utc_now):
        self.db = db
        self.clock = clock

    # --- Sessions ---

    def create_session(self, user_id: UUID, workout_id: Optional[UUID] = None, notes: Optional[str] = None) -> WorkoutSession:
        if workout_id is not None:
            exists = self.db.query(Workout.id).filter(Workout.id == workout_id).first()
            if not exists:
                raise NotFoundError("Workout", str(workout_id))

        session = WorkoutSession(
            user_id=user_id,
            workout_id=workout_id,
            started_at=self.clock(),
            notes=notes,
        )
        self.db.add(session)
        self.db.commit()
        self.db.refresh(session)
        logger.info(f"User {user_id} started session {session.id} for workout {workout_id}")
        return session

    def get_session(self, user_id: UUID, session_id: UUID) -> WorkoutSession:
        session = (
            self.db.query(WorkoutSession)
            .filter(WorkoutSession.id == session_id, WorkoutSession.user_id == user_id)
            .first()
        )
        if session is None:
            raise NotFoundError("Workout session", str(session_id))
        return session

    def get_active_session(self, user_id: UUID) -> Optional[WorkoutSession]:
        """Most recently started session that has not been completed."""
        return (
            self.db.query(WorkoutSession)
            .filter(WorkoutSession.user_id == user_id, WorkoutSession.completed_at.is_(None))
            .order_by(WorkoutSession.started_at.desc())
            .first()
        )

    def complete_session(
        self,
        user_id: UUID,
        session_id: UUID,
        duration: Optional[int] = None,
        calories_burned: Optional[int] = None,
    ) -> WorkoutSession:
        session = self.get_session(user_id, session_id)
        if session.completed_at is not None:
            raise SessionAlreadyCompletedError(str(session_id))

        session.completed_at = self.clock()
        session.duration = duration
        session.calories_burned = calories_burned
        self.db.flush()

        UserProgressService(self.db, clock=self.clock).record_session_completion(user_id, calories_burned)
        self.db.refresh(session)
        return session

    def list_sessions(self, user_id: UUID) -> List[WorkoutSession]:
        return (
            self.db.query(WorkoutSession)
            .filter(WorkoutSession.user_id == user_id)
            .order_by(WorkoutSession.started_at.desc())
            .all()
        )

    def completed_workout_ids(self, user_id: UUID) -> List[UUID]:
        rows = (
            self.db.query(WorkoutSession.workout_id)
            .filter(
                WorkoutSession.user_id == user_id,
                WorkoutSession.completed_at.isnot(None),
                WorkoutSession.workout_id.isnot(None),
            )
            .all()
        )
        return [workout_id for (workout_id,) in rows]

    # --- Exercise sets ---

    def create_exercise_set(self, user_id: UUID, session_id: UUID, **fields) -> ExerciseSet:
        self.get_session(user_id, session_id)
        exercise_set = ExerciseSet(session_id=session_id, **fields)
        self.db.add(exercise_set)
        self.db.commit()
        self.db.refresh(exercise_set)
        return exercise_set

    def update_exercise_set(self, user_id: UUID, set_id: UUID, **fields) -> ExerciseSet:
        exercise_set = (
            self.db.query(ExerciseSet)
            .join(WorkoutSession, ExerciseSet.session_id == WorkoutSession.id)
            .filter(ExerciseSet.id == set_id, WorkoutSession.user_id == user_id)
            .first()
        )
        if exercise_set is None:
            raise NotFoundError("Exercise set", str(set_id))

        for name, value in fields.items():
            setattr(exercise_set, name, value)
        self.db.commit()
        self.db.refresh(exercise_set)
        return exercise_set

    def list_session_sets(self, user_id: UUID, session_id: UUID) -> List[ExerciseSet]:
        self.get_session(user_id, session_id)
        return (
            self.db.query(ExerciseSet)
            .filter(ExerciseSet.session_id == session_id)
            .order_by(ExerciseSet.set_number.asc())
            .all()
        )
