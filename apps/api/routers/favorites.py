"""Favorite workouts API."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID

from core.auth import get_current_user
from core.database import get_db
from models import User
from schemas import FavoriteCreate, FavoriteResponse, FavoriteStatus, WorkoutResponse
from services import favorites

router = APIRouter(prefix="/v1/favorites", tags=["favorites"])


@router.get("", response_model=List[WorkoutResponse])
def list_favorites(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return favorites.list_favorite_workouts(db, current_user.id)


@router.post("", response_model=FavoriteResponse)
def add_favorite(
    payload: FavoriteCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return favorites.add_favorite(db, current_user.id, payload.workout_id)


@router.delete("/{workout_id}")
def remove_favorite(
    workout_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    removed = favorites.remove_favorite(db, current_user.id, workout_id)
    return {"message": "Favorite removed", "removed": removed}


@router.get("/{workout_id}/check", response_model=FavoriteStatus)
def check_favorite(
    workout_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return FavoriteStatus(is_favorited=favorites.is_favorited(db, current_user.id, workout_id))
