"""
Workout Session API

Start/complete workout sessions and log exercise sets. Completing a
session also updates the user's progress totals.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from core.auth import get_current_user
from core.database import get_db
from models import User
from schemas import (
    ExerciseSetCreate,
    ExerciseSetResponse,
    ExerciseSetUpdate,
    WorkoutSessionComplete,
    WorkoutSessionCreate,
    WorkoutSessionResponse,
)
from services.workout_sessions import WorkoutSessionService

router = APIRouter(prefix="/v1", tags=["sessions"])


@router.post("/sessions", response_model=WorkoutSessionResponse, status_code=status.HTTP_201_CREATED)
def create_session(
    payload: WorkoutSessionCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return WorkoutSessionService(db).create_session(
        current_user.id, workout_id=payload.workout_id, notes=payload.notes
    )


@router.get("/sessions", response_model=List[WorkoutSessionResponse])
def list_sessions(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Sessions for the current user, newest first."""
    return WorkoutSessionService(db).list_sessions(current_user.id)


@router.get("/sessions/active", response_model=Optional[WorkoutSessionResponse])
def get_active_session(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return WorkoutSessionService(db).get_active_session(current_user.id)


@router.get("/sessions/completed-workouts", response_model=List[UUID])
def completed_workouts(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Workout ids the user has finished at least once (may repeat)."""
    return WorkoutSessionService(db).completed_workout_ids(current_user.id)


@router.put("/sessions/{session_id}/complete", response_model=WorkoutSessionResponse)
def complete_session(
    session_id: UUID,
    payload: WorkoutSessionComplete,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Finish a session. 409 if it was already completed."""
    return WorkoutSessionService(db).complete_session(
        current_user.id,
        session_id,
        duration=payload.duration,
        calories_burned=payload.calories_burned,
    )


@router.get("/sessions/{session_id}/sets", response_model=List[ExerciseSetResponse])
def list_session_sets(
    session_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return WorkoutSessionService(db).list_session_sets(current_user.id, session_id)


@router.post("/sets", response_model=ExerciseSetResponse, status_code=status.HTTP_201_CREATED)
def create_exercise_set(
    payload: ExerciseSetCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    fields = payload.model_dump(exclude={"session_id"})
    return WorkoutSessionService(db).create_exercise_set(current_user.id, payload.session_id, **fields)


@router.put("/sets/{set_id}", response_model=ExerciseSetResponse)
def update_exercise_set(
    set_id: UUID,
    payload: ExerciseSetUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return WorkoutSessionService(db).update_exercise_set(
        current_user.id, set_id, **payload.model_dump(exclude_unset=True)
    )
