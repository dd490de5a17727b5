import uuid

import pytest

from app.core.config import Settings, get_settings
from app.core.exceptions import DataSourceUnavailable
from app.db.session import get_db
from app.main import app
from app.services import progress as progress_service
from app.services.progress import ExerciseRef
from tests.factories import session_rows

BENCH = ExerciseRef(id=uuid.uuid4(), name="Bench Press", muscle_group="Chest")
SQUAT = ExerciseRef(id=uuid.uuid4(), name="Squat", muscle_group="Legs")


@pytest.fixture
def fake_store(monkeypatch):
    """Replace the loaders with in-memory data; record what they were asked for."""
    calls: dict = {}
    rows = (
        session_rows(BENCH.id, [40, 50], days_ago=1)
        + session_rows(BENCH.id, [60, 70], days_ago=8)
        + session_rows(SQUAT.id, [None], days_ago=2)
    )

    async def load_exercises(db, muscle_group=None):
        calls["muscle_group"] = muscle_group
        return [e for e in (BENCH, SQUAT) if muscle_group in (None, e.muscle_group)]

    async def load_progress_rows(db, exercise_ids, *, session_window=None, completed_only=True):
        calls["session_window"] = session_window
        calls["completed_only"] = completed_only
        return [r for r in rows if r.exercise_id in exercise_ids]

    async def get_exercise(db, exercise_id):
        return next((e for e in (BENCH, SQUAT) if e.id == exercise_id), None)

    monkeypatch.setattr(progress_service, "load_exercises", load_exercises)
    monkeypatch.setattr(progress_service, "load_progress_rows", load_progress_rows)
    monkeypatch.setattr(progress_service, "get_exercise", get_exercise)
    return calls


@pytest.fixture
def broken_store(monkeypatch):
    async def load_exercises(db, muscle_group=None):
        return [BENCH]

    async def load_progress_rows(db, exercise_ids, **kwargs):
        raise DataSourceUnavailable("connection refused", operation="load_progress_rows")

    monkeypatch.setattr(progress_service, "load_exercises", load_exercises)
    monkeypatch.setattr(progress_service, "load_progress_rows", load_progress_rows)


def test_weight_summary(client, fake_store):
    response = client.get("/api/v1/progress/exercises-weight-summary")

    assert response.status_code == 200
    assert response.json() == [
        {
            "exercise_id": str(BENCH.id),
            "name": "Bench Press",
            "muscle_group": "Chest",
            "last_weight": 50.0,
            "session_count": 2,
        }
    ]
    assert fake_store["session_window"] == 3
    assert fake_store["completed_only"] is True


def test_weight_summary_window_and_muscle_group(client, fake_store):
    response = client.get(
        "/api/v1/progress/exercises-weight-summary",
        params={"session_window": 1, "muscle_group": "Chest"},
    )

    assert response.status_code == 200
    assert [item["session_count"] for item in response.json()] == [1]
    assert fake_store == {"muscle_group": "Chest", "session_window": 1, "completed_only": True}


@pytest.mark.parametrize("params", [{"session_window": 0}, {"muscle_group": "Forearms"}])
def test_weight_summary_rejects_bad_query(client, fake_store, params):
    response = client.get("/api/v1/progress/exercises-weight-summary", params=params)
    assert response.status_code == 422


def test_weight_summary_degrades_to_empty_list(client, broken_store):
    response = client.get("/api/v1/progress/exercises-weight-summary")

    assert response.status_code == 200
    assert response.json() == []


def test_weight_summary_abort_mode_returns_503(client, broken_store):
    app.dependency_overrides[get_settings] = lambda: Settings(progress_on_error="abort")

    response = client.get("/api/v1/progress/exercises-weight-summary")

    assert response.status_code == 503
    assert response.json() == {"detail": "Data source unavailable"}


def test_exercises_with_progress(client, fake_store):
    response = client.get("/api/v1/progress/exercises-with-progress")

    assert response.status_code == 200
    [item] = response.json()
    assert item["name"] == "Bench Press"
    assert item["last_weight"] == 50.0
    assert item["max_weight"] == 70.0
    assert item["total_sessions"] == 2


def test_weight_history(client, fake_store):
    response = client.get(f"/api/v1/progress/exercises/{BENCH.id}/weight-history", params={"limit": 1})

    assert response.status_code == 200
    [point] = response.json()
    assert point["max_weight"] == 50.0
    assert point["all_weights"] == [40.0, 50.0]
    assert fake_store["completed_only"] is False


def test_weight_history_unknown_exercise(client, fake_store):
    response = client.get(f"/api/v1/progress/exercises/{uuid.uuid4()}/weight-history")

    assert response.status_code == 404
    assert response.json() == {"detail": "Exercise not found"}


def test_weight_history_data_source_down(client, monkeypatch):
    async def get_exercise(db, exercise_id):
        raise DataSourceUnavailable("timeout", operation="get_exercise")

    monkeypatch.setattr(progress_service, "get_exercise", get_exercise)

    response = client.get(f"/api/v1/progress/exercises/{BENCH.id}/weight-history")

    assert response.status_code == 503


def test_rest_timer_config(client):
    response = client.get("/api/v1/rest-timer/config")

    assert response.status_code == 200
    assert response.json() == {
        "default_seconds": 90,
        "default_display": "1:30",
        "presets": [60, 90, 120],
        "adjust_steps": [-15, 15, 30],
    }


def test_liveness(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_readiness_reports_unreachable_database(client):
    class DownSession:
        async def execute(self, statement):
            raise OSError("connection refused")

    async def down_db():
        yield DownSession()

    app.dependency_overrides[get_db] = down_db

    response = client.get("/api/v1/health/ready")

    assert response.status_code == 503
    assert response.json() == {"detail": "Data source unavailable"}
