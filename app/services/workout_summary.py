"""Workout log summary: duration, set count and training volume."""

from __future__ import annotations

import re
from datetime import datetime, timezone

from app.core.constants import (
    DEFAULT_ESTIMATED_WEIGHT,
    ESTIMATED_WEIGHT_BY_MUSCLE_GROUP,
    HIGH_REPS_EFFECTIVE_REPS,
    HIGH_REPS_EFFECTIVE_WEIGHT,
    HIGH_REPS_MAX_WEIGHT,
    HIGH_REPS_THRESHOLD,
)

IN_PROGRESS = "in progress"

_LEADING_INT = re.compile(r"\d+")


def format_duration(start: datetime, end: datetime | None) -> str:
    """HH:MM:SS between start and end, or "in progress" without an end."""
    if end is None:
        return IN_PROGRESS
    # Normalize both to tz-aware UTC for safe subtraction
    if start.tzinfo is None:
        start = start.replace(tzinfo=timezone.utc)
    if end.tzinfo is None:
        end = end.replace(tzinfo=timezone.utc)
    total = max(0, int((end - start).total_seconds()))
    hours, rem = divmod(total, 3600)
    minutes, seconds = divmod(rem, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def set_volume(weight: float | None, reps: int | None) -> float:
    """weight x reps; very high-rep light sets (bodyweight work) are capped."""
    w = float(weight or 0)
    r = int(reps or 0)
    if w <= 0 or r <= 0:
        return 0.0
    if r > HIGH_REPS_THRESHOLD and w < HIGH_REPS_MAX_WEIGHT:
        return min(w, HIGH_REPS_EFFECTIVE_WEIGHT) * min(r, HIGH_REPS_EFFECTIVE_REPS)
    return w * r


def counts_as_performed(completed: bool, reps: int | None) -> bool:
    return bool(completed) or (reps or 0) > 0


def parse_template_reps(reps: str | int | None) -> int:
    """Template reps are free text ("10", "8-12"); take the first number."""
    if reps is None:
        return 0
    if isinstance(reps, int):
        return reps
    match = _LEADING_INT.search(reps)
    return int(match.group()) if match else 0


def estimated_weight(muscle_group: str | None) -> float:
    return ESTIMATED_WEIGHT_BY_MUSCLE_GROUP.get(muscle_group or "", DEFAULT_ESTIMATED_WEIGHT)


def build_workout_summary(log, template_exercises: list | None = None) -> dict:
    """
    Summary for a workout log with ``exercises`` (each with ``exercise`` and ``sets``) loaded.
    When nothing was recorded and the log came from a template, sets/volume are estimated
    from ``template_exercises`` (sets x reps x estimated weight for the muscle group).
    """
    exercises: list[dict] = []
    total_sets = 0
    total_volume = 0.0
    has_actual_sets = False

    for log_exercise in log.exercises:
        exercise = log_exercise.exercise
        sets = sorted(log_exercise.sets, key=lambda s: s.set_number)
        exercises.append(
            {
                "id": log_exercise.exercise_id,
                "name": exercise.name if exercise else log_exercise.exercise_name,
                "muscle_group": exercise.muscle_group if exercise else None,
                "sets": [
                    {
                        "id": s.id,
                        "set_number": s.set_number,
                        "reps": s.reps,
                        "weight": float(s.weight) if s.weight is not None else None,
                        "completed": s.completed,
                    }
                    for s in sets
                ],
            }
        )
        if sets:
            has_actual_sets = True
        for s in sets:
            if counts_as_performed(s.completed, s.reps):
                total_sets += 1
                total_volume += set_volume(s.weight, s.reps)

    if not has_actual_sets and template_exercises:
        if not exercises:
            exercises = [
                {
                    "id": te.exercise_id,
                    "name": te.exercise.name if te.exercise else "Exercise",
                    "muscle_group": te.exercise.muscle_group if te.exercise else None,
                    "sets": [],
                }
                for te in template_exercises
            ]
        total_sets = 0
        total_volume = 0.0
        for te in template_exercises:
            total_sets += te.sets or 0
            reps = parse_template_reps(te.reps)
            if te.sets and reps:
                muscle_group = te.exercise.muscle_group if te.exercise else None
                total_volume += te.sets * reps * estimated_weight(muscle_group)

    return {
        "id": log.id,
        "name": log.name,
        "start_time": log.start_time,
        "end_time": log.end_time,
        "completed": log.end_time is not None,
        "duration": format_duration(log.start_time, log.end_time),
        "exercises": exercises,
        "total_sets": total_sets,
        "total_volume": round(total_volume, 2),
    }
