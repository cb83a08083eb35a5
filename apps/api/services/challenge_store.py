"""
SQLAlchemy-backed ChallengeStore.

Maps `user_challenges` rows to immutable `Challenge` values. Writes commit
immediately; `get_active_challenge(for_update=True)` takes a row lock so a
read-modify-write in ChallengeTracker.complete_day cannot lose a concurrent
completion (PostgreSQL; SQLite ignores FOR UPDATE).
"""
from datetime import datetime
import logging
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.clock import as_utc, utc_now
from core.exceptions import NotFoundError
from models import UserChallenge
from services.challenge_tracker import Challenge, normalize_completed_days

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = {"current_day", "completed_days", "is_active", "completed_at"}


def to_challenge(row: UserChallenge) -> Challenge:
    return Challenge(
        id=row.id,
        user_id=row.user_id,
        start_date=as_utc(row.start_date),
        current_day=row.current_day,
        completed_days=normalize_completed_days(row.completed_days),
        is_active=bool(row.is_active),
        completed_at=as_utc(row.completed_at) if row.completed_at else None,
        paused_at=as_utc(row.paused_at) if row.paused_at else None,
    )


class SqlChallengeStore:
    def __init__(self, db: Session):
        self.db = db

    def create_challenge(self, user_id: UUID, start_date: datetime) -> Challenge:
        """
        Insert an active challenge. If a concurrent start already inserted one,
        the partial unique index rejects this row and the existing one is returned.
        """
        row = UserChallenge(
            user_id=user_id,
            start_date=start_date,
            current_day=1,
            is_active=True,
            completed_days=[],
            completed_at=None,
            updated_at=start_date,
        )
        self.db.add(row)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            existing = self.get_active_challenge(user_id)
            if existing is None:
                raise
            logger.info(f"Concurrent start for user {user_id}; reusing challenge {existing.id}")
            return existing
        self.db.refresh(row)
        return to_challenge(row)

    def _active_query(self, user_id: UUID):
        return (
            self.db.query(UserChallenge)
            .filter(UserChallenge.user_id == user_id, UserChallenge.is_active.is_(True))
            .order_by(UserChallenge.created_at.desc())
        )

    def get_active_challenge(self, user_id: UUID, for_update: bool = False) -> Optional[Challenge]:
        query = self._active_query(user_id)
        if for_update:
            query = query.with_for_update()
        row = query.first()
        return to_challenge(row) if row else None

    def update_challenge(self, challenge_id: UUID, **fields: Any) -> Challenge:
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update challenge fields: {sorted(unknown)}")

        row = self.db.query(UserChallenge).filter(UserChallenge.id == challenge_id).first()
        if row is None:
            raise NotFoundError("Challenge", str(challenge_id))

        for name, value in fields.items():
            if name == "completed_days":
                value = sorted(value)
            setattr(row, name, value)
        row.updated_at = utc_now()

        self.db.commit()
        self.db.refresh(row)
        return to_challenge(row)
