"""
Integration tests for the 90-day challenge endpoints.

Runs the full stack (auth dependency, router, tracker, SQL store) against
the test database.
"""
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from conftest import auth_headers
from models import User, UserChallenge
from services.challenge_store import SqlChallengeStore


def _shift_start(db_session, user_id, days):
    """Move the user's active challenge `days` into the past."""
    row = (
        db_session.query(UserChallenge)
        .filter(UserChallenge.user_id == user_id, UserChallenge.is_active.is_(True))
        .one()
    )
    row.start_date = datetime.now(timezone.utc) - timedelta(days=days, minutes=5)
    db_session.commit()


class TestStartAndRead:
    def test_get_without_challenge_returns_null(self, client, user_headers):
        response = client.get("/v1/challenge", headers=user_headers)
        assert response.status_code == 200
        assert response.json() is None

    def test_current_day_without_challenge(self, client, user_headers):
        response = client.get("/v1/challenge/current-day", headers=user_headers)
        assert response.status_code == 200
        assert response.json() == {"has_active_challenge": False, "current_day": None}

    def test_start_challenge(self, client, test_user, user_headers):
        response = client.post("/v1/challenge/start", headers=user_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["user_id"] == str(test_user.id)
        assert data["current_day"] == 1
        assert data["completed_days"] == []
        assert data["completed_count"] == 0
        assert data["days_remaining"] == 90
        assert data["is_active"] is True
        assert data["completed_at"] is None

    def test_start_twice_returns_same_challenge(self, client, db_session, test_user, user_headers):
        first = client.post("/v1/challenge/start", headers=user_headers).json()
        second = client.post("/v1/challenge/start", headers=user_headers).json()

        assert first["id"] == second["id"]
        assert db_session.query(UserChallenge).filter(UserChallenge.user_id == test_user.id).count() == 1

    def test_current_day_is_derived_from_start_date(self, client, db_session, test_user, user_headers):
        client.post("/v1/challenge/start", headers=user_headers)
        _shift_start(db_session, test_user.id, days=4)

        assert client.get("/v1/challenge/current-day", headers=user_headers).json() == {
            "has_active_challenge": True,
            "current_day": 5,
        }
        assert client.get("/v1/challenge", headers=user_headers).json()["current_day"] == 5

    def test_first_request_creates_local_user(self, client, db_session):
        user_id = uuid4()
        headers = auth_headers(user_id, email="newcomer@example.com", user_metadata={"first_name": "Nia"})

        response = client.post("/v1/challenge/start", headers=headers)

        assert response.status_code == 200
        user = db_session.query(User).filter(User.id == user_id).one()
        assert user.email == "newcomer@example.com"
        assert user.first_name == "Nia"


class TestTodaysWorkout:
    def test_null_without_challenge(self, client, make_workout, user_headers):
        make_workout(day_number=1)
        response = client.get("/v1/challenge/today", headers=user_headers)
        assert response.status_code == 200
        assert response.json() is None

    def test_workout_for_current_day(self, client, db_session, make_workout, test_user, user_headers):
        make_workout(day_number=1, title="Total Synergistics")
        make_workout(day_number=3, title="X3 Yoga")
        client.post("/v1/challenge/start", headers=user_headers)
        _shift_start(db_session, test_user.id, days=2)

        response = client.get("/v1/challenge/today", headers=user_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "X3 Yoga"
        assert data["day_number"] == 3
        assert data["embed_url"] == "https://player.vimeo.com/video/916076102"

    def test_null_on_catalog_gap(self, client, make_workout, user_headers):
        make_workout(day_number=2)
        client.post("/v1/challenge/start", headers=user_headers)

        response = client.get("/v1/challenge/today", headers=user_headers)
        assert response.status_code == 200
        assert response.json() is None


class TestCompleteDay:
    def test_complete_without_challenge_is_404(self, client, user_headers):
        response = client.post("/v1/challenge/days/1/complete", headers=user_headers)
        assert response.status_code == 404
        assert response.json()["error_code"] == "NO_ACTIVE_CHALLENGE"

    def test_complete_day(self, client, user_headers):
        client.post("/v1/challenge/start", headers=user_headers)
        response = client.post("/v1/challenge/days/1/complete", headers=user_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["completed_days"] == [1]
        assert data["completed_count"] == 1
        assert data["days_remaining"] == 89
        assert data["is_active"] is True

    def test_complete_is_idempotent_and_sorted(self, client, user_headers):
        client.post("/v1/challenge/start", headers=user_headers)
        client.post("/v1/challenge/days/7/complete", headers=user_headers)
        client.post("/v1/challenge/days/2/complete", headers=user_headers)
        response = client.post("/v1/challenge/days/7/complete", headers=user_headers)

        assert response.json()["completed_days"] == [2, 7]

    def test_completed_days_persist(self, client, db_session, test_user, user_headers):
        client.post("/v1/challenge/start", headers=user_headers)
        client.post("/v1/challenge/days/3/complete", headers=user_headers)

        db_session.expire_all()
        row = db_session.query(UserChallenge).filter(UserChallenge.user_id == test_user.id).one()
        assert row.completed_days == [3]

    def test_out_of_range_day_is_rejected(self, client, user_headers):
        client.post("/v1/challenge/start", headers=user_headers)
        assert client.post("/v1/challenge/days/0/complete", headers=user_headers).status_code == 422
        assert client.post("/v1/challenge/days/91/complete", headers=user_headers).status_code == 422
        assert client.get("/v1/challenge", headers=user_headers).json()["completed_days"] == []

    def test_calendar_expiry_completes_challenge(self, client, db_session, test_user, user_headers):
        client.post("/v1/challenge/start", headers=user_headers)
        _shift_start(db_session, test_user.id, days=95)

        response = client.post("/v1/challenge/days/12/complete", headers=user_headers)

        data = response.json()
        assert data["is_active"] is False
        assert data["completed_at"] is not None
        assert data["current_day"] == 90
        # Finished challenges are no longer "active"
        assert client.get("/v1/challenge", headers=user_headers).json() is None

    def test_start_after_completion_creates_new_challenge(self, client, db_session, test_user, user_headers):
        first = client.post("/v1/challenge/start", headers=user_headers).json()
        _shift_start(db_session, test_user.id, days=100)
        client.post("/v1/challenge/days/1/complete", headers=user_headers)

        second = client.post("/v1/challenge/start", headers=user_headers).json()

        assert second["id"] != first["id"]
        assert second["completed_days"] == []

    def test_challenges_are_per_user(self, client, user_headers):
        client.post("/v1/challenge/start", headers=user_headers)
        client.post("/v1/challenge/days/1/complete", headers=user_headers)

        other = auth_headers(uuid4(), email="other@example.com")
        assert client.get("/v1/challenge", headers=other).json() is None
        assert client.post("/v1/challenge/days/1/complete", headers=other).status_code == 404


class TestOneActiveChallenge:
    def _row(self, user_id, is_active=True):
        now = datetime.now(timezone.utc)
        return UserChallenge(
            user_id=user_id,
            start_date=now,
            current_day=1,
            is_active=is_active,
            completed_days=[],
            completed_at=None if is_active else now,
            updated_at=now,
        )

    def test_second_active_row_is_rejected(self, db_session, test_user):
        db_session.add(self._row(test_user.id))
        db_session.commit()

        db_session.add(self._row(test_user.id))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_finished_rows_do_not_block_a_new_active_one(self, db_session, test_user):
        db_session.add(self._row(test_user.id, is_active=False))
        db_session.add(self._row(test_user.id, is_active=False))
        db_session.commit()

        db_session.add(self._row(test_user.id))
        db_session.commit()

        count = db_session.query(UserChallenge).filter(UserChallenge.user_id == test_user.id).count()
        assert count == 3

    def test_create_reuses_challenge_inserted_concurrently(self, db_session, test_user):
        # Another request won the race between the tracker's read and its insert
        existing = self._row(test_user.id)
        db_session.add(existing)
        db_session.commit()

        store = SqlChallengeStore(db_session)
        created = store.create_challenge(test_user.id, start_date=datetime.now(timezone.utc))

        assert created.id == existing.id
        active = (
            db_session.query(UserChallenge)
            .filter(UserChallenge.user_id == test_user.id, UserChallenge.is_active.is_(True))
            .count()
        )
        assert active == 1
