"""
Pytest configuration and fixtures

Tests run against an in-memory SQLite database. Each test gets a fresh
schema, and the app's get_db dependency is overridden to share the
test's session, so nothing leaks between tests.
"""
import os
import sys
from uuid import uuid4

# Settings are read at import time; configure before importing the app.
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-supabase-jwt-secret-at-least-32-characters")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("ADMIN_EMAILS", "admin@example.com")

# Add the parent directory to the path so we can import from services
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from fastapi.testclient import TestClient

from main import app
from core.database import Base, SessionLocal, engine, get_db
from core.security import create_access_token
from models import User, Workout


@pytest.fixture(scope="function")
def db_session():
    """Fresh schema per test; the app sees the same session via dependency override."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()

    def _override_get_db():
        try:
            yield session
        finally:
            pass

    app.dependency_overrides[get_db] = _override_get_db
    yield session
    app.dependency_overrides.pop(get_db, None)
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    return TestClient(app)


def auth_headers(user_id=None, email=None, **claims):
    """Bearer header with a Supabase-shaped token for `user_id`."""
    payload = {"sub": str(user_id or uuid4())}
    if email:
        payload["email"] = email
    payload.update(claims)
    token = create_access_token(data=payload)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def test_user(db_session):
    user = User(id=uuid4(), email=f"test_{uuid4().hex[:8]}@example.com", first_name="Test")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def user_headers(test_user):
    return auth_headers(test_user.id, email=test_user.email)


@pytest.fixture
def admin_headers(db_session):
    return auth_headers(uuid4(), email="admin@example.com")


@pytest.fixture
def make_workout(db_session):
    """Factory: persist a workout for a schedule day."""
    def _make(day_number=None, title=None, **fields):
        values = {
            "title": title or f"Workout day {day_number}",
            "video_url": "https://vimeo.com/916076102",
            "vimeo_id": "916076102",
            "duration": 1800,
            "difficulty": "intermediate",
            "calories": 250,
            "rating": 4.5,
            "day_number": day_number,
        }
        values.update(fields)
        workout = Workout(**values)
        db_session.add(workout)
        db_session.commit()
        db_session.refresh(workout)
        return workout

    return _make
