import uuid

import pytest

API = "/api/v1"


@pytest.fixture
def bench(db_client):
    return db_client.post(f"{API}/exercises", json={"name": "Bench Press", "muscle_group": "Chest"}).json()


@pytest.fixture
def template(db_client):
    response = db_client.post(f"{API}/templates", json={"name": "Upper A", "description": "Heavy day"})
    assert response.status_code == 201
    return response.json()


def add_entry(client, template_id, exercise_id, **fields) -> dict:
    body = {"exercise_id": exercise_id, "sets": 3, "reps": "8-12", **fields}
    response = client.post(f"{API}/templates/{template_id}/exercises", json=body)
    assert response.status_code == 201
    return response.json()


def test_create_template(template):
    assert template["name"] == "Upper A"
    assert template["exercises"] == []


def test_add_exercise_to_template(db_client, template, bench):
    entry = add_entry(db_client, template["id"], bench["id"], reps=10)

    assert entry["reps"] == "10"
    assert entry["rest_duration_seconds"] == 90
    assert entry["exercise"] == {"id": bench["id"], "name": "Bench Press", "muscle_group": "Chest"}

    detail = db_client.get(f"{API}/templates/{template['id']}").json()
    assert [e["exercise_id"] for e in detail["exercises"]] == [bench["id"]]


def test_add_unknown_exercise_or_template_is_404(db_client, template, bench):
    unknown_exercise = db_client.post(
        f"{API}/templates/{template['id']}/exercises",
        json={"exercise_id": str(uuid.uuid4()), "sets": 3, "reps": "10"},
    )
    unknown_template = db_client.post(
        f"{API}/templates/{uuid.uuid4()}/exercises",
        json={"exercise_id": bench["id"], "sets": 3, "reps": "10"},
    )

    assert unknown_exercise.status_code == 404
    assert unknown_template.status_code == 404


def test_template_holds_many_exercises(db_client, template, bench):
    for order in range(25):
        add_entry(db_client, template["id"], bench["id"], order=order)

    detail = db_client.get(f"{API}/templates/{template['id']}").json()
    assert [e["order"] for e in detail["exercises"]] == list(range(25))


def test_patch_template_exercise_ignores_nulls(db_client, template, bench):
    entry = add_entry(db_client, template["id"], bench["id"])

    response = db_client.patch(
        f"{API}/templates/{template['id']}/exercises/{entry['id']}",
        json={"sets": None, "reps": "12", "weight": 40},
    )

    assert response.status_code == 200
    assert response.json()["sets"] == 3
    assert response.json()["reps"] == "12"
    assert response.json()["weight"] == 40


def test_patch_template(db_client, template):
    response = db_client.patch(f"{API}/templates/{template['id']}", json={"name": None, "description": "Light"})

    assert response.status_code == 200
    assert response.json()["name"] == "Upper A"
    assert response.json()["description"] == "Light"


def test_remove_exercise_and_delete_template(db_client, template, bench):
    entry = add_entry(db_client, template["id"], bench["id"])
    entry_url = f"{API}/templates/{template['id']}/exercises/{entry['id']}"

    assert db_client.delete(entry_url).status_code == 204
    assert db_client.delete(entry_url).status_code == 404
    assert db_client.delete(f"{API}/templates/{template['id']}").status_code == 204
    assert db_client.get(f"{API}/templates/{template['id']}").status_code == 404


def test_instantiate_starts_a_log(db_client, template, bench):
    add_entry(db_client, template["id"], bench["id"])

    response = db_client.post(f"{API}/templates/{template['id']}/instantiate")

    assert response.status_code == 201
    log = response.json()
    assert log["template_id"] == template["id"]
    assert log["name"].startswith("Upper A - ")
    assert log["completed"] is False


def test_instantiated_log_summary_is_estimated_from_template(db_client, template, bench):
    add_entry(db_client, template["id"], bench["id"])
    log = db_client.post(f"{API}/templates/{template['id']}/instantiate").json()

    summary = db_client.get(f"{API}/workout-logs/{log['id']}/summary").json()

    assert summary["duration"] == "in progress"
    assert summary["total_sets"] == 3
    assert summary["total_volume"] == 3 * 8 * 65
    assert [e["name"] for e in summary["exercises"]] == ["Bench Press"]


def test_instantiate_unknown_template_is_404(db_client):
    assert db_client.post(f"{API}/templates/{uuid.uuid4()}/instantiate").status_code == 404
