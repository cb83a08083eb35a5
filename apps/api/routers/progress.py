"""
Progress API Router

Totals for the progress page: workouts completed, calories burned and
the current daily workout streak.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.auth import get_current_user
from core.database import get_db
from models import User
from schemas import UserProgressResponse
from services.user_progress import UserProgressService

router = APIRouter(prefix="/v1/progress", tags=["progress"])


@router.get("", response_model=UserProgressResponse)
def get_progress(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Zeros for a user who has not completed a session yet."""
    snapshot = UserProgressService(db).get_progress(current_user.id)
    return UserProgressResponse.model_validate(snapshot)
