"""Favorite workouts. One row per (user, workout); adding twice is a no-op."""

from typing import List
from uuid import UUID
import logging

from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from models import FavoriteWorkout, Workout

logger = logging.getLogger(__name__)


def _favorite(db: Session, user_id: UUID, workout_id: UUID):
    return (
        db.query(FavoriteWorkout)
        .filter(FavoriteWorkout.user_id == user_id, FavoriteWorkout.workout_id == workout_id)
        .first()
    )


def add_favorite(db: Session, user_id: UUID, workout_id: UUID) -> FavoriteWorkout:
    if not db.query(Workout.id).filter(Workout.id == workout_id).first():
        raise NotFoundError("Workout", str(workout_id))

    existing = _favorite(db, user_id, workout_id)
    if existing is not None:
        return existing

    favorite = FavoriteWorkout(user_id=user_id, workout_id=workout_id)
    db.add(favorite)
    db.commit()
    db.refresh(favorite)
    return favorite


def remove_favorite(db: Session, user_id: UUID, workout_id: UUID) -> bool:
    """Returns True when a favorite was removed."""
    deleted = (
        db.query(FavoriteWorkout)
        .filter(FavoriteWorkout.user_id == user_id, FavoriteWorkout.workout_id == workout_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    return bool(deleted)


def list_favorite_workouts(db: Session, user_id: UUID) -> List[Workout]:
    return (
        db.query(Workout)
        .join(FavoriteWorkout, FavoriteWorkout.workout_id == Workout.id)
        .filter(FavoriteWorkout.user_id == user_id)
        .order_by(FavoriteWorkout.created_at.desc())
        .all()
    )


def is_favorited(db: Session, user_id: UUID, workout_id: UUID) -> bool:
    return _favorite(db, user_id, workout_id) is not None
