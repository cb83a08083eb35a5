"""Exercise library endpoints."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID

from core.auth import get_current_user, require_admin
from core.database import get_db
from core.exceptions import NotFoundError
from models import Exercise, User
from schemas import ExerciseCreate, ExerciseResponse

router = APIRouter(prefix="/v1/exercises", tags=["exercises"])


@router.get("", response_model=List[ExerciseResponse])
def list_exercises(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return db.query(Exercise).order_by(Exercise.name.asc()).all()


@router.get("/{exercise_id}", response_model=ExerciseResponse)
def get_exercise(
    exercise_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    exercise = db.query(Exercise).filter(Exercise.id == exercise_id).first()
    if not exercise:
        raise NotFoundError("Exercise", str(exercise_id))
    return exercise


@router.post("", response_model=ExerciseResponse, status_code=status.HTTP_201_CREATED)
def create_exercise(
    payload: ExerciseCreate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    exercise = Exercise(**payload.model_dump())
    db.add(exercise)
    db.commit()
    db.refresh(exercise)
    return exercise
