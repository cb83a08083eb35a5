"""
Workout Catalog API

Read endpoints for every signed-in user; catalog maintenance (create,
update, Vimeo assignment, seeding) is admin-only.
"""
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from core.auth import get_current_user, require_admin
from core.database import get_db
from models import User
from schemas import (
    VimeoWorkoutCreate,
    WorkoutBulkUpdate,
    WorkoutCreate,
    WorkoutDetailResponse,
    WorkoutExerciseResponse,
    WorkoutGroup,
    WorkoutResponse,
    WorkoutUpdate,
)
from services.workout_catalog import WorkoutCatalogService

router = APIRouter(prefix="/v1/workouts", tags=["workouts"])


@router.get("", response_model=List[WorkoutResponse])
def list_workouts(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """All workouts in schedule order."""
    return WorkoutCatalogService(db).list_workouts()


@router.get("/featured", response_model=List[WorkoutResponse])
def featured_workouts(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Top-rated workouts for the home screen."""
    return WorkoutCatalogService(db).featured_workouts()


@router.get("/groups", response_model=List[WorkoutGroup])
def workout_groups(
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Scheduled days grouped by workout title."""
    return WorkoutCatalogService(db).get_workout_groups()


@router.get("/day/{day_number}", response_model=Optional[WorkoutResponse])
def workout_for_day(
    day_number: int = Path(..., ge=1, le=90),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return WorkoutCatalogService(db).find_workout_by_day(day_number)


@router.get("/{workout_id}", response_model=WorkoutDetailResponse)
def get_workout(
    workout_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Workout with its ordered exercises."""
    workout = WorkoutCatalogService(db).get_workout(workout_id)
    detail = WorkoutDetailResponse.model_validate(workout)
    detail.exercises = [
        WorkoutExerciseResponse.model_validate(we) for we in workout.workout_exercises
    ]
    return detail


@router.post("", response_model=WorkoutResponse, status_code=status.HTTP_201_CREATED)
def create_workout(
    payload: WorkoutCreate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return WorkoutCatalogService(db).create_workout(**payload.model_dump())


@router.patch("/{workout_id}", response_model=WorkoutResponse)
def update_workout(
    workout_id: UUID,
    payload: WorkoutUpdate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return WorkoutCatalogService(db).update_workout(workout_id, **payload.model_dump(exclude_unset=True))


@router.post("/vimeo", response_model=WorkoutResponse)
def add_vimeo_workout(
    payload: VimeoWorkoutCreate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """
    Attach a Vimeo video to a schedule day.

    Replaces the existing workout for `day_number` if there is one.
    """
    return WorkoutCatalogService(db).add_vimeo_workout(**payload.model_dump())


@router.post("/bulk-update")
def bulk_update_workouts(
    payload: WorkoutBulkUpdate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Assign one video to every workout with the given title."""
    return WorkoutCatalogService(db).bulk_update_workouts_by_name(payload.workout_name, payload.vimeo_url)


@router.post("/seed")
def seed_workouts(
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Fill empty schedule days with placeholder workouts."""
    return WorkoutCatalogService(db).seed_initial_workouts()


@router.post("/refresh-titles")
def refresh_workout_titles(
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Rename scheduled workouts to the program calendar titles."""
    return WorkoutCatalogService(db).update_workout_titles()
