"""
90-Day Challenge Progress Tracker

Owns the start / progress / completion state machine for a user's single
active challenge:

    [no challenge] --start--> [active, day 1]
    [active, day N] --complete(d)--> [active, day N']   (N' from the clock)
    [active] --(90 days completed or day index > 90)--> [inactive, completed_at set]

The current day is always derived from start_date and the injected clock;
the stored current_day is a cache written on completion and never trusted.
The completion count is len(completed_days), not current_day: users can
complete days out of order and can fall behind the calendar.

Persistence and workout lookup are collaborators so the state machine can
be exercised without a database.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Any, FrozenSet, Iterable, Optional, Protocol
from uuid import UUID
import logging

from core.clock import Clock, as_utc, utc_now
from core.exceptions import NoActiveChallengeError, ValidationError
from core.logging import log_fields

logger = logging.getLogger(__name__)

CHALLENGE_LENGTH_DAYS = 90
ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class Challenge:
    """Immutable snapshot of a user's challenge."""
    id: UUID
    user_id: UUID
    start_date: datetime
    current_day: int
    completed_days: FrozenSet[int]
    is_active: bool
    completed_at: Optional[datetime] = None
    paused_at: Optional[datetime] = None

    @property
    def completed_count(self) -> int:
        return len(self.completed_days)

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None


class ChallengeStore(Protocol):
    """Persistence collaborator for challenge records."""

    def create_challenge(self, user_id: UUID, start_date: datetime) -> Challenge: ...

    def get_active_challenge(self, user_id: UUID, for_update: bool = False) -> Optional[Challenge]: ...

    def update_challenge(self, challenge_id: UUID, **fields: Any) -> Challenge: ...


class WorkoutCatalog(Protocol):
    """Read-only workout lookup by schedule day."""

    def find_workout_by_day(self, day_number: int) -> Optional[Any]: ...


def day_index(start_date: datetime, now: datetime) -> int:
    """
    Uncapped 1-based day of the challenge at `now`.

    Whole elapsed days since start, plus one. Day 1 starts at start_date.
    """
    elapsed = as_utc(now) - as_utc(start_date)
    return (elapsed // ONE_DAY) + 1


def compute_current_day(start_date: datetime, now: datetime) -> int:
    """Day shown to the user: day_index clamped to [1, CHALLENGE_LENGTH_DAYS]."""
    return max(1, min(day_index(start_date, now), CHALLENGE_LENGTH_DAYS))


def validate_day_number(day_number: int) -> int:
    if isinstance(day_number, bool) or not isinstance(day_number, int):
        raise ValidationError("day_number must be an integer", field="day_number")
    if not 1 <= day_number <= CHALLENGE_LENGTH_DAYS:
        raise ValidationError(
            f"day_number must be between 1 and {CHALLENGE_LENGTH_DAYS}, got {day_number}",
            field="day_number",
        )
    return day_number


def normalize_completed_days(days: Optional[Iterable[int]]) -> FrozenSet[int]:
    """Build the completed-day set from stored data, dropping anything off the schedule."""
    return frozenset(
        int(d) for d in (days or ())
        if 1 <= int(d) <= CHALLENGE_LENGTH_DAYS
    )


class ChallengeTracker:
    """
    Challenge state machine over a store, a workout catalog and a clock.

    Every operation performs at most two reads and one write against the
    store. Reads never write back the recomputed current day.
    """

    def __init__(
        self,
        store: ChallengeStore,
        catalog: WorkoutCatalog,
        clock: Clock = utc_now,
    ):
        self.store = store
        self.catalog = catalog
        self.clock = clock

    def _refreshed(self, challenge: Challenge, now: datetime) -> Challenge:
        return replace(challenge, current_day=compute_current_day(challenge.start_date, now))

    def start_challenge(self, user_id: UUID) -> Challenge:
        """
        Start a challenge, or return the active one untouched.

        Calling this twice yields the same challenge id.
        """
        existing = self.store.get_active_challenge(user_id)
        if existing is not None:
            logger.debug(f"Challenge already active for user {user_id}: {existing.id}")
            return self._refreshed(existing, self.clock())

        challenge = self.store.create_challenge(user_id, start_date=self.clock())
        logger.info(
            f"Started challenge {challenge.id} for user {user_id}",
            extra=log_fields(user_id=user_id, challenge_id=challenge.id),
        )
        return challenge

    def get_challenge(self, user_id: UUID) -> Optional[Challenge]:
        """Active challenge with current_day recomputed, or None."""
        challenge = self.store.get_active_challenge(user_id)
        if challenge is None:
            return None
        return self._refreshed(challenge, self.clock())

    def get_current_day(self, user_id: UUID) -> Optional[int]:
        challenge = self.store.get_active_challenge(user_id)
        if challenge is None:
            return None
        return compute_current_day(challenge.start_date, self.clock())

    def get_todays_workout(self, user_id: UUID) -> Optional[Any]:
        """Workout scheduled for the current day; None without a challenge or on a catalog gap."""
        current_day = self.get_current_day(user_id)
        if current_day is None:
            logger.debug(f"No active challenge for user {user_id}")
            return None

        workout = self.catalog.find_workout_by_day(current_day)
        if workout is None:
            logger.warning(f"No workout scheduled for challenge day {current_day}")
        return workout

    def complete_day(self, user_id: UUID, day_number: int) -> Challenge:
        """
        Mark a schedule day done.

        Re-completing a day is a no-op on the set. The challenge completes the
        first time all 90 days are done or the calendar runs past day 90;
        completed_at is set exactly once and never cleared here.
        """
        validate_day_number(day_number)

        challenge = self.store.get_active_challenge(user_id, for_update=True)
        if challenge is None:
            raise NoActiveChallengeError(str(user_id))

        now = self.clock()
        completed_days = challenge.completed_days | {day_number}
        index = day_index(challenge.start_date, now)
        current_day = max(1, min(index, CHALLENGE_LENGTH_DAYS))

        fields = {
            "current_day": current_day,
            "completed_days": completed_days,
        }

        finished = len(completed_days) >= CHALLENGE_LENGTH_DAYS or index > CHALLENGE_LENGTH_DAYS
        if finished:
            fields["is_active"] = False
        if finished and challenge.completed_at is None:
            fields["completed_at"] = now
            logger.info(
                f"Challenge {challenge.id} completed with {len(completed_days)} days done",
                extra=log_fields(
                    user_id=user_id,
                    challenge_id=challenge.id,
                    completed_count=len(completed_days),
                    day_index=index,
                ),
            )

        return self.store.update_challenge(challenge.id, **fields)
