"""
Tests for the workout catalog: Vimeo helpers, the program schedule,
catalog service operations and the admin endpoints.
"""
from datetime import datetime, timezone
from uuid import uuid4

import pytest

from core.exceptions import NotFoundError
from models import Workout
from services import program_schedule
from services.vimeo import embed_url, extract_vimeo_id, thumbnail_url
from services.workout_catalog import WorkoutCatalogService


class TestVimeoHelpers:
    @pytest.mark.parametrize("url,expected", [
        ("https://vimeo.com/916076102", "916076102"),
        ("https://vimeo.com/video/916076102", "916076102"),
        ("https://player.vimeo.com/video/916076102?h=abc123", "916076102"),
        ("https://vimeo.com/channels/staffpicks/123456", "123456"),
        ("https://vimeo.com/groups/fitness/videos/987654", "987654"),
        ("916076102", "916076102"),
        ("  916076102  ", "916076102"),
    ])
    def test_extract_vimeo_id(self, url, expected):
        assert extract_vimeo_id(url) == expected

    def test_unrecognised_value_is_returned_unchanged(self):
        assert extract_vimeo_id("not-a-vimeo-link") == "not-a-vimeo-link"

    def test_thumbnail_and_embed_urls(self):
        assert thumbnail_url("42") == "https://vumbnail.com/42.jpg"
        assert embed_url("42") == "https://player.vimeo.com/video/42"
        assert embed_url(None) is None


class TestProgramSchedule:
    def test_schedule_names_89_days(self):
        assert len(program_schedule.PROGRAM_SCHEDULE) == 89
        assert program_schedule.scheduled_title(1) == "Total Synergistics"
        assert program_schedule.scheduled_title(89) == "Dynamix"
        assert program_schedule.scheduled_title(90) is None
        assert program_schedule.scheduled_title(0) is None

    @pytest.mark.parametrize("day,week", [(1, 1), (7, 1), (8, 2), (84, 12), (85, 13), (90, 13)])
    def test_week_for_day(self, day, week):
        assert program_schedule.week_for_day(day) == week

    def test_seed_fields(self):
        fields = program_schedule.seed_workout_fields(45)
        assert fields["day_number"] == 45
        assert fields["week_number"] == 7
        assert fields["difficulty"] == "intermediate"
        assert fields["calories"] == 280
        assert fields["equipment"] == "Dumbbells"
        assert program_schedule.seed_workout_fields(1)["difficulty"] == "beginner"
        assert program_schedule.seed_workout_fields(61)["difficulty"] == "advanced"


class TestCatalogService:
    def test_find_workout_by_day_takes_oldest(self, db_session, make_workout):
        make_workout(day_number=5, title="Duplicate", created_at=datetime(2024, 2, 1, tzinfo=timezone.utc))
        make_workout(day_number=5, title="First", created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))

        found = WorkoutCatalogService(db_session).find_workout_by_day(5)
        assert found.title == "First"
        assert WorkoutCatalogService(db_session).find_workout_by_day(6) is None

    def test_get_workout_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            WorkoutCatalogService(db_session).get_workout(uuid4())

    def test_create_workout_derives_vimeo_fields(self, db_session):
        workout = WorkoutCatalogService(db_session).create_workout(
            title="CVX",
            video_url="https://vimeo.com/123456",
            difficulty="advanced",
            duration=1800,
            day_number=5,
        )
        assert workout.vimeo_id == "123456"
        assert workout.thumbnail_url == "https://vumbnail.com/123456.jpg"

    def test_featured_limited_to_ten(self, db_session, make_workout):
        for day in range(1, 13):
            make_workout(day_number=day, rating=4.0 + day / 100)
        featured = WorkoutCatalogService(db_session).featured_workouts()
        assert len(featured) == 10
        assert featured[0].day_number == 12

    def test_groups(self, db_session, make_workout):
        make_workout(day_number=3, title="X3 Yoga")
        make_workout(day_number=1, title="Total Synergistics")
        make_workout(day_number=10, title="X3 Yoga")
        make_workout(day_number=None, title="Unscheduled")

        groups = WorkoutCatalogService(db_session).get_workout_groups()

        assert groups == [
            {"title": "Total Synergistics", "count": 1, "days": [1]},
            {"title": "X3 Yoga", "count": 2, "days": [3, 10]},
        ]

    def test_bulk_update_by_name(self, db_session, make_workout):
        make_workout(day_number=3, title="X3 Yoga")
        make_workout(day_number=10, title="X3 Yoga")
        make_workout(day_number=4, title="The Challenge")

        result = WorkoutCatalogService(db_session).bulk_update_workouts_by_name(
            "X3 Yoga", "https://vimeo.com/555"
        )

        assert result == {"updated_count": 2}
        yoga = db_session.query(Workout).filter(Workout.title == "X3 Yoga").all()
        assert {w.vimeo_id for w in yoga} == {"555"}
        assert {w.thumbnail_url for w in yoga} == {"https://vumbnail.com/555.jpg"}
        other = db_session.query(Workout).filter(Workout.title == "The Challenge").one()
        assert other.vimeo_id == "916076102"

    def test_add_vimeo_workout_creates_with_defaults(self, db_session):
        workout = WorkoutCatalogService(db_session).add_vimeo_workout(
            title="Agility X", vimeo_url="https://vimeo.com/777", day_number=2, week_number=1
        )
        assert workout.vimeo_id == "777"
        assert workout.duration == 1800
        assert workout.calories == 200
        assert workout.difficulty == "intermediate"
        assert workout.instructor == "Instructor"
        assert workout.equipment == "Bodyweight"

    def test_add_vimeo_workout_replaces_existing_day(self, db_session, make_workout):
        existing = make_workout(day_number=2, title="Old")

        workout = WorkoutCatalogService(db_session).add_vimeo_workout(
            title="Agility X", vimeo_url="https://player.vimeo.com/video/888", day_number=2
        )

        assert workout.id == existing.id
        assert workout.title == "Agility X"
        assert workout.vimeo_id == "888"
        assert db_session.query(Workout).filter(Workout.day_number == 2).count() == 1

    def test_seed_fills_only_missing_days(self, db_session, make_workout):
        make_workout(day_number=1, title="Keep me")

        result = WorkoutCatalogService(db_session).seed_initial_workouts()

        assert result == {"created_count": 89, "skipped_count": 1}
        assert db_session.query(Workout).count() == 90
        assert WorkoutCatalogService(db_session).find_workout_by_day(1).title == "Keep me"
        assert WorkoutCatalogService(db_session).seed_initial_workouts() == {"created_count": 0, "skipped_count": 90}

    def test_update_titles_follows_schedule(self, db_session):
        service = WorkoutCatalogService(db_session)
        service.seed_initial_workouts()

        result = service.update_workout_titles()

        assert result == {"updated_count": 89}
        assert service.find_workout_by_day(2).title == "Agility X"
        assert service.find_workout_by_day(2).description == "Agility X - 30-minute workout for day 2"
        assert service.find_workout_by_day(90).title == "Day 90: Cardio Challenge"


class TestCatalogEndpoints:
    def test_list_and_detail(self, client, make_workout, user_headers):
        workout = make_workout(day_number=1, title="Total Synergistics")

        listing = client.get("/v1/workouts", headers=user_headers)
        assert listing.status_code == 200
        assert [w["title"] for w in listing.json()] == ["Total Synergistics"]

        detail = client.get(f"/v1/workouts/{workout.id}", headers=user_headers)
        assert detail.status_code == 200
        assert detail.json()["exercises"] == []
        assert detail.json()["embed_url"] == "https://player.vimeo.com/video/916076102"

    def test_detail_not_found(self, client, user_headers):
        response = client.get(f"/v1/workouts/{uuid4()}", headers=user_headers)
        assert response.status_code == 404

    def test_workout_for_day(self, client, make_workout, user_headers):
        make_workout(day_number=4, title="The Challenge")
        assert client.get("/v1/workouts/day/4", headers=user_headers).json()["title"] == "The Challenge"
        assert client.get("/v1/workouts/day/5", headers=user_headers).json() is None
        assert client.get("/v1/workouts/day/91", headers=user_headers).status_code == 422

    def test_detail_includes_ordered_exercises(self, client, db_session, make_workout, user_headers):
        from models import Exercise, WorkoutExercise
        workout = make_workout(day_number=1)
        squat = Exercise(name="Squat", muscle_groups=["legs"])
        press = Exercise(name="Press", muscle_groups=["shoulders"])
        db_session.add_all([squat, press])
        db_session.flush()
        db_session.add_all([
            WorkoutExercise(workout_id=workout.id, exercise_id=press.id, order_index=2, sets=3, reps=10),
            WorkoutExercise(workout_id=workout.id, exercise_id=squat.id, order_index=1, sets=4, reps=8),
        ])
        db_session.commit()
        db_session.expire_all()

        response = client.get(f"/v1/workouts/{workout.id}", headers=user_headers)

        exercises = response.json()["exercises"]
        assert [e["exercise"]["name"] for e in exercises] == ["Squat", "Press"]
        assert exercises[0]["sets"] == 4

    def test_admin_vimeo_and_seed(self, client, admin_headers):
        response = client.post("/v1/workouts/vimeo", headers=admin_headers, json={
            "title": "CVX", "vimeo_url": "https://vimeo.com/321", "day_number": 5,
        })
        assert response.status_code == 200
        assert response.json()["thumbnail_url"] == "https://vumbnail.com/321.jpg"

        seeded = client.post("/v1/workouts/seed", headers=admin_headers)
        assert seeded.json() == {"created_count": 89, "skipped_count": 1}

        groups = client.get("/v1/workouts/groups", headers=admin_headers)
        assert groups.status_code == 200
        assert {"title": "CVX", "count": 1, "days": [5]} in groups.json()

    def test_admin_create_and_patch(self, client, admin_headers):
        created = client.post("/v1/workouts", headers=admin_headers, json={
            "title": "Isometrix", "video_url": "https://vimeo.com/1000", "day_number": 22,
        })
        assert created.status_code == 201
        workout_id = created.json()["id"]
        assert created.json()["vimeo_id"] == "1000"

        patched = client.patch(f"/v1/workouts/{workout_id}", headers=admin_headers, json={"title": "Isometrix II"})
        assert patched.status_code == 200
        assert patched.json()["title"] == "Isometrix II"
        assert patched.json()["vimeo_id"] == "1000"

    def test_patch_rejects_null_for_required_fields(self, client, admin_headers):
        created = client.post("/v1/workouts", headers=admin_headers, json={
            "title": "Isometrix", "video_url": "https://vimeo.com/1000", "day_number": 22,
        })
        workout_id = created.json()["id"]

        for field in ("title", "video_url", "duration", "difficulty"):
            response = client.patch(f"/v1/workouts/{workout_id}", headers=admin_headers, json={field: None})
            assert response.status_code == 422, field

        # Nullable columns can still be cleared
        cleared = client.patch(f"/v1/workouts/{workout_id}", headers=admin_headers, json={"instructor": None})
        assert cleared.status_code == 200

        unchanged = client.get(f"/v1/workouts/{workout_id}", headers=admin_headers).json()
        assert unchanged["title"] == "Isometrix"
        assert unchanged["video_url"] == "https://vimeo.com/1000"

    def test_admin_bulk_update_and_refresh_titles(self, client, admin_headers):
        client.post("/v1/workouts/seed", headers=admin_headers)
        refreshed = client.post("/v1/workouts/refresh-titles", headers=admin_headers)
        assert refreshed.json() == {"updated_count": 89}

        bulk = client.post("/v1/workouts/bulk-update", headers=admin_headers, json={
            "workout_name": "Dynamix", "vimeo_url": "https://vimeo.com/4242",
        })
        assert bulk.status_code == 200
        assert bulk.json()["updated_count"] > 0

    def test_catalog_writes_require_admin(self, client, user_headers):
        assert client.post("/v1/workouts/seed", headers=user_headers).status_code == 403
        assert client.get("/v1/workouts/groups", headers=user_headers).status_code == 403
        assert client.post("/v1/workouts/vimeo", headers=user_headers, json={
            "title": "CVX", "vimeo_url": "321",
        }).status_code == 403
