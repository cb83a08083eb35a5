"""Favorite workouts endpoints."""
from uuid import uuid4

from models import FavoriteWorkout


def test_add_list_check_remove(client, make_workout, user_headers):
    workout = make_workout(day_number=1, title="Total Synergistics")

    added = client.post("/v1/favorites", headers=user_headers, json={"workout_id": str(workout.id)})
    assert added.status_code == 200
    assert added.json()["workout_id"] == str(workout.id)

    listing = client.get("/v1/favorites", headers=user_headers).json()
    assert [w["title"] for w in listing] == ["Total Synergistics"]
    assert client.get(f"/v1/favorites/{workout.id}/check", headers=user_headers).json() == {"is_favorited": True}

    removed = client.delete(f"/v1/favorites/{workout.id}", headers=user_headers)
    assert removed.status_code == 200
    assert removed.json()["removed"] is True
    assert client.get(f"/v1/favorites/{workout.id}/check", headers=user_headers).json() == {"is_favorited": False}
    assert client.get("/v1/favorites", headers=user_headers).json() == []


def test_add_twice_is_idempotent(client, db_session, make_workout, test_user, user_headers):
    workout = make_workout(day_number=2)

    first = client.post("/v1/favorites", headers=user_headers, json={"workout_id": str(workout.id)}).json()
    second = client.post("/v1/favorites", headers=user_headers, json={"workout_id": str(workout.id)}).json()

    assert first["id"] == second["id"]
    assert db_session.query(FavoriteWorkout).filter(FavoriteWorkout.user_id == test_user.id).count() == 1


def test_favorite_unknown_workout_is_404(client, user_headers):
    response = client.post("/v1/favorites", headers=user_headers, json={"workout_id": str(uuid4())})
    assert response.status_code == 404


def test_remove_missing_favorite(client, user_headers):
    response = client.delete(f"/v1/favorites/{uuid4()}", headers=user_headers)
    assert response.status_code == 200
    assert response.json()["removed"] is False
