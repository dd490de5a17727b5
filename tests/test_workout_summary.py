import uuid
from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from app.services.workout_summary import (
    IN_PROGRESS,
    build_workout_summary,
    format_duration,
    parse_template_reps,
    set_volume,
)

START = datetime(2024, 3, 1, 18, 0)


def make_set(number, reps, weight, completed=True):
    return SimpleNamespace(id=uuid.uuid4(), set_number=number, reps=reps, weight=weight, completed=completed)


def make_log(exercises, *, minutes=None):
    end = START + timedelta(minutes=minutes) if minutes is not None else None
    return SimpleNamespace(id=uuid.uuid4(), name="Push - 01/03/2024", start_time=START, end_time=end, exercises=exercises)


def make_log_exercise(name, muscle_group, sets):
    exercise = SimpleNamespace(id=uuid.uuid4(), name=name, muscle_group=muscle_group)
    return SimpleNamespace(exercise_id=exercise.id, exercise=exercise, exercise_name=name, sets=sets)


def test_format_duration():
    assert format_duration(START, START + timedelta(hours=1, minutes=2, seconds=3)) == "01:02:03"
    assert format_duration(START, None) == IN_PROGRESS


def test_set_volume_caps_high_rep_light_sets():
    assert set_volume(60, 10) == 600
    assert set_volume(0, 200) == 0
    assert set_volume(None, 10) == 0
    assert set_volume(10, 150) == 5 * 50


@pytest.mark.parametrize("reps,expected", [("10", 10), ("8-12", 8), ("AMRAP", 0), (None, 0), (12, 12)])
def test_parse_template_reps(reps, expected):
    assert parse_template_reps(reps) == expected


def test_summary_counts_completed_or_repped_sets():
    bench = make_log_exercise(
        "Bench Press",
        "Chest",
        [make_set(2, 8, 62.5), make_set(1, 10, 60), make_set(3, 0, 65, completed=False)],
    )
    summary = build_workout_summary(make_log([bench], minutes=75))

    assert summary["completed"] is True
    assert summary["duration"] == "01:15:00"
    assert summary["total_sets"] == 2
    assert summary["total_volume"] == 1100.0
    assert [s["set_number"] for s in summary["exercises"][0]["sets"]] == [1, 2, 3]


def test_unfinished_log_summary():
    summary = build_workout_summary(make_log([]))

    assert summary["completed"] is False
    assert summary["duration"] == IN_PROGRESS
    assert summary["total_sets"] == 0
    assert summary["total_volume"] == 0


def test_template_estimate_when_nothing_recorded():
    squat = SimpleNamespace(id=uuid.uuid4(), name="Squat", muscle_group="Legs")
    curl = SimpleNamespace(id=uuid.uuid4(), name="Curl", muscle_group="Biceps")
    template_exercises = [
        SimpleNamespace(exercise_id=squat.id, exercise=squat, sets=3, reps="5"),
        SimpleNamespace(exercise_id=curl.id, exercise=curl, sets=2, reps="10-12"),
    ]

    summary = build_workout_summary(make_log([], minutes=30), template_exercises)

    assert summary["total_sets"] == 5
    assert summary["total_volume"] == 3 * 5 * 100 + 2 * 10 * 25
    assert [e["name"] for e in summary["exercises"]] == ["Squat", "Curl"]


def test_recorded_sets_win_over_template():
    bench = make_log_exercise("Bench Press", "Chest", [make_set(1, 5, 80)])
    template_exercises = [SimpleNamespace(exercise_id=uuid.uuid4(), exercise=None, sets=4, reps="10")]

    summary = build_workout_summary(make_log([bench], minutes=10), template_exercises)

    assert summary["total_sets"] == 1
    assert summary["total_volume"] == 400
