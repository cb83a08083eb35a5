"""
90-Day Challenge API

Thin HTTP layer over ChallengeTracker. Identity comes from the Supabase
token; the tracker never sees anything but a user id.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from core.auth import get_current_user
from core.database import get_db
from models import User
from schemas import ChallengeResponse, CurrentDayResponse, WorkoutResponse
from services.challenge_store import SqlChallengeStore
from services.challenge_tracker import CHALLENGE_LENGTH_DAYS, Challenge, ChallengeTracker
from services.workout_catalog import WorkoutCatalogService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/challenge", tags=["challenge"])


def get_challenge_tracker(db: Session = Depends(get_db)) -> ChallengeTracker:
    return ChallengeTracker(SqlChallengeStore(db), WorkoutCatalogService(db))


def _to_response(challenge: Challenge) -> ChallengeResponse:
    return ChallengeResponse(
        id=challenge.id,
        user_id=challenge.user_id,
        start_date=challenge.start_date,
        current_day=challenge.current_day,
        completed_days=sorted(challenge.completed_days),
        completed_count=challenge.completed_count,
        days_remaining=CHALLENGE_LENGTH_DAYS - challenge.completed_count,
        is_active=challenge.is_active,
        completed_at=challenge.completed_at,
    )


@router.post("/start", response_model=ChallengeResponse)
def start_challenge(
    current_user: User = Depends(get_current_user),
    tracker: ChallengeTracker = Depends(get_challenge_tracker),
):
    """
    Start the 90-day challenge.

    Idempotent: with a challenge already active, returns it unchanged.
    """
    return _to_response(tracker.start_challenge(current_user.id))


@router.get("", response_model=Optional[ChallengeResponse])
def get_challenge(
    current_user: User = Depends(get_current_user),
    tracker: ChallengeTracker = Depends(get_challenge_tracker),
):
    """Active challenge with today's day number, or null."""
    challenge = tracker.get_challenge(current_user.id)
    return _to_response(challenge) if challenge else None


@router.get("/current-day", response_model=CurrentDayResponse)
def get_current_day(
    current_user: User = Depends(get_current_user),
    tracker: ChallengeTracker = Depends(get_challenge_tracker),
):
    current_day = tracker.get_current_day(current_user.id)
    return CurrentDayResponse(
        has_active_challenge=current_day is not None,
        current_day=current_day,
    )


@router.get("/today", response_model=Optional[WorkoutResponse])
def get_todays_workout(
    current_user: User = Depends(get_current_user),
    tracker: ChallengeTracker = Depends(get_challenge_tracker),
):
    """
    Workout scheduled for the current challenge day.

    Returns null (not 404) without an active challenge or when the catalog
    has no workout for the day.
    """
    return tracker.get_todays_workout(current_user.id)


@router.post("/days/{day_number}/complete", response_model=ChallengeResponse)
def complete_day(
    day_number: int = Path(..., ge=1, le=CHALLENGE_LENGTH_DAYS),
    current_user: User = Depends(get_current_user),
    tracker: ChallengeTracker = Depends(get_challenge_tracker),
):
    """
    Mark a schedule day as done.

    404 without an active challenge. Completing the same day twice is a no-op.
    The response may show is_active=false: that call completed the challenge.
    """
    return _to_response(tracker.complete_day(current_user.id, day_number))
