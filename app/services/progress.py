"""Progress aggregation over logged workouts.

The loaders issue one joined query each (log exercise -> session -> sets) and the
``compute_*`` functions are pure passes over those rows, so the ordering rules
never depend on the order rows arrive in:

- sessions are ranked by start time, newest first (ties broken by session id);
- only completed sessions (end_time set) count towards summaries;
- sets without a weight never contribute.
"""

from __future__ import annotations

import re
import uuid
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import DataSourceUnavailable, MalformedRecord
from app.models.exercise import Exercise
from app.models.workout_log import WorkoutLog, WorkoutLogExercise, WorkoutLogSet

_DATE_SUFFIXES = (
    re.compile(r"\s*-\s*\d{2}/\d{2}/\d{4}.*$"),
    re.compile(r"\s*-\s*\d{4}-\d{2}-\d{2}.*$"),
    re.compile(r"\d{2}/\d{2}/\d{4}.*$"),
    re.compile(r"\d{4}-\d{2}-\d{2}.*$"),
    re.compile(r"\d{2}/\d{2}\d{8,}.*$"),
)


@dataclass(frozen=True)
class ExerciseRef:
    id: uuid.UUID
    name: str
    muscle_group: str | None = None


@dataclass(frozen=True)
class LoggedSetRow:
    """One row of the log-exercise/session/set join. set_id is None for a log exercise without sets."""

    exercise_id: uuid.UUID
    log_id: uuid.UUID
    log_name: str
    start_time: datetime | None
    end_time: datetime | None
    set_id: uuid.UUID | None = None
    set_number: int | None = None
    reps: int | None = None
    weight: float | None = None


@dataclass(frozen=True)
class ExerciseProgressSummary:
    exercise_id: uuid.UUID
    name: str
    muscle_group: str | None
    last_weight: float
    session_count: int


@dataclass(frozen=True)
class ExerciseProgress:
    exercise_id: uuid.UUID
    name: str
    muscle_group: str | None
    last_weight: float
    max_weight: float
    last_used: datetime
    total_sessions: int


@dataclass(frozen=True)
class WeightHistoryPoint:
    workout_log_id: uuid.UUID
    workout_date: datetime
    workout_name: str
    max_weight: float
    total_sets: int
    all_weights: list[float]


@dataclass
class _Session:
    log_id: uuid.UUID
    name: str
    start_time: datetime
    completed: bool
    weights: list[float] = field(default_factory=list)


@dataclass
class ProgressResult:
    """Summaries plus the read error, if any. Callers pick degrade (``summaries``) or abort (``unwrap``)."""

    summaries: list[ExerciseProgressSummary] = field(default_factory=list)
    error: DataSourceUnavailable | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> list[ExerciseProgressSummary]:
        if self.error is not None:
            raise self.error
        return self.summaries


def clean_workout_name(name: str) -> str:
    """Strip a trailing date (``Push - 12/03/2024``, ``Legs 2024-03-12``) from a workout name."""
    for pattern in _DATE_SUFFIXES:
        name = pattern.sub("", name)
    return name.strip()


def _set_weight(row: LoggedSetRow) -> float | None:
    if row.set_number is None:
        raise MalformedRecord(f"set {row.set_id} has no set_number")
    if row.weight is None:
        return None
    try:
        return float(row.weight)
    except (TypeError, ValueError) as exc:
        raise MalformedRecord(f"set {row.set_id} has a non-numeric weight {row.weight!r}") from exc


def _group_sessions(
    rows: Iterable[LoggedSetRow], *, completed_only: bool = True
) -> dict[uuid.UUID, dict[uuid.UUID, _Session]]:
    """exercise_id -> log_id -> session with the valid weights recorded for that exercise."""
    grouped: dict[uuid.UUID, dict[uuid.UUID, _Session]] = {}
    for row in rows:
        if completed_only and row.end_time is None:
            continue
        if row.start_time is None:
            logger.debug("Skipping log {} for exercise {}: no start time", row.log_id, row.exercise_id)
            continue
        sessions = grouped.setdefault(row.exercise_id, {})
        session = sessions.get(row.log_id)
        if session is None:
            session = _Session(
                log_id=row.log_id,
                name=row.log_name,
                start_time=row.start_time,
                completed=row.end_time is not None,
            )
            sessions[row.log_id] = session
        if row.set_id is None:
            continue
        try:
            weight = _set_weight(row)
        except MalformedRecord as exc:
            logger.debug("Skipping malformed set: {}", exc)
            continue
        if weight is not None:
            session.weights.append(weight)
    return grouped


def _newest_first(sessions: Iterable[_Session]) -> list[_Session]:
    return sorted(sessions, key=lambda s: (s.start_time, s.log_id), reverse=True)


def compute_progress_summaries(
    exercises: Sequence[ExerciseRef],
    rows: Iterable[LoggedSetRow],
    session_window: int | None = None,
) -> list[ExerciseProgressSummary]:
    """
    Per exercise: last_weight is the max weight of the most recent completed session
    with weight data (not the all-time max); session_count counts completed sessions
    with at least one weighted set among the ``session_window`` most recent ones.
    Exercises without data are left out; output keeps the input order.
    """
    if session_window is not None and session_window < 1:
        raise ValueError("session_window must be a positive integer")

    sessions_by_exercise = _group_sessions(rows)
    summaries: list[ExerciseProgressSummary] = []
    for exercise in exercises:
        sessions = _newest_first(sessions_by_exercise.get(exercise.id, {}).values())
        if session_window is not None:
            sessions = sessions[:session_window]

        last_weight: float | None = None
        session_count = 0
        for session in sessions:
            if not session.weights:
                continue
            session_count += 1
            if last_weight is None:
                last_weight = max(session.weights)

        if session_count and last_weight is not None:
            summaries.append(
                ExerciseProgressSummary(
                    exercise_id=exercise.id,
                    name=exercise.name,
                    muscle_group=exercise.muscle_group,
                    last_weight=last_weight,
                    session_count=session_count,
                )
            )
    return summaries


def compute_exercises_with_progress(
    exercises: Sequence[ExerciseRef],
    rows: Iterable[LoggedSetRow],
) -> list[ExerciseProgress]:
    """Exercises with weight > 0 in completed sessions, most recently used first."""
    sessions_by_exercise = _group_sessions(rows)
    results: list[ExerciseProgress] = []
    for exercise in exercises:
        sessions = [
            s for s in _newest_first(sessions_by_exercise.get(exercise.id, {}).values())
            if any(w > 0 for w in s.weights)
        ]
        if not sessions:
            continue
        latest = sessions[0]
        results.append(
            ExerciseProgress(
                exercise_id=exercise.id,
                name=exercise.name,
                muscle_group=exercise.muscle_group,
                last_weight=max(latest.weights),
                max_weight=max(max(s.weights) for s in sessions),
                last_used=latest.start_time,
                total_sessions=len({s.start_time.date() for s in sessions}),
            )
        )
    results.sort(key=lambda p: p.last_used, reverse=True)
    return results


def compute_weight_history(rows: Iterable[LoggedSetRow], limit: int | None = None) -> list[WeightHistoryPoint]:
    """Max weight per session (finished or not), newest first."""
    points: list[WeightHistoryPoint] = []
    for sessions in _group_sessions(rows, completed_only=False).values():
        for session in sessions.values():
            if not session.weights or max(session.weights) <= 0:
                continue
            points.append(
                WeightHistoryPoint(
                    workout_log_id=session.log_id,
                    workout_date=session.start_time,
                    workout_name=clean_workout_name(session.name),
                    max_weight=max(session.weights),
                    total_sets=len(session.weights),
                    all_weights=[w for w in session.weights if w > 0],
                )
            )
    points.sort(key=lambda p: (p.workout_date, p.workout_log_id), reverse=True)
    if limit is not None:
        points = points[:limit]
    return points


# ── Loaders ──


async def load_exercises(db: AsyncSession, muscle_group: str | None = None) -> list[ExerciseRef]:
    """Exercises to report on, ordered by name."""
    stmt = select(Exercise.id, Exercise.name, Exercise.muscle_group).order_by(Exercise.name, Exercise.id)
    if muscle_group:
        stmt = stmt.where(Exercise.muscle_group == muscle_group)
    try:
        result = await db.execute(stmt)
    except (SQLAlchemyError, OSError) as exc:
        logger.warning("Failed to load exercises: {}", exc)
        raise DataSourceUnavailable(str(exc), operation="load_exercises") from exc
    return [ExerciseRef(id=r.id, name=r.name, muscle_group=r.muscle_group) for r in result.all()]


async def get_exercise(db: AsyncSession, exercise_id: uuid.UUID) -> ExerciseRef | None:
    try:
        result = await db.execute(
            select(Exercise.id, Exercise.name, Exercise.muscle_group).where(Exercise.id == exercise_id)
        )
    except (SQLAlchemyError, OSError) as exc:
        logger.warning("Failed to load exercise {}: {}", exercise_id, exc)
        raise DataSourceUnavailable(str(exc), operation="get_exercise") from exc
    row = result.one_or_none()
    if row is None:
        return None
    return ExerciseRef(id=row.id, name=row.name, muscle_group=row.muscle_group)


async def load_progress_rows(
    db: AsyncSession,
    exercise_ids: Sequence[uuid.UUID],
    *,
    session_window: int | None = None,
    completed_only: bool = True,
) -> list[LoggedSetRow]:
    """
    One query: log exercises for these exercises joined to their session and
    (outer) to their sets. With session_window, a dense_rank subquery keeps only
    the N most recent sessions per exercise so older sessions are never read.
    """
    if not exercise_ids:
        return []

    stmt = (
        select(
            WorkoutLogExercise.exercise_id,
            WorkoutLog.id.label("log_id"),
            WorkoutLog.name.label("log_name"),
            WorkoutLog.start_time,
            WorkoutLog.end_time,
            WorkoutLogSet.id.label("set_id"),
            WorkoutLogSet.set_number,
            WorkoutLogSet.reps,
            WorkoutLogSet.weight,
        )
        .join(WorkoutLog, WorkoutLog.id == WorkoutLogExercise.log_id)
        .outerjoin(WorkoutLogSet, WorkoutLogSet.log_exercise_id == WorkoutLogExercise.id)
        .where(WorkoutLogExercise.exercise_id.in_(exercise_ids))
    )
    if completed_only:
        stmt = stmt.where(WorkoutLog.end_time.isnot(None))
    if session_window is not None:
        ranked = (
            select(
                WorkoutLogExercise.id.label("log_exercise_id"),
                func.dense_rank()
                .over(
                    partition_by=WorkoutLogExercise.exercise_id,
                    order_by=(WorkoutLog.start_time.desc(), WorkoutLog.id.desc()),
                )
                .label("session_rank"),
            )
            .join(WorkoutLog, WorkoutLog.id == WorkoutLogExercise.log_id)
            .where(WorkoutLogExercise.exercise_id.in_(exercise_ids))
        )
        if completed_only:
            ranked = ranked.where(WorkoutLog.end_time.isnot(None))
        ranked = ranked.subquery()
        stmt = stmt.join(ranked, ranked.c.log_exercise_id == WorkoutLogExercise.id).where(
            ranked.c.session_rank <= session_window
        )
    stmt = stmt.order_by(WorkoutLog.start_time.desc(), WorkoutLog.id, WorkoutLogSet.set_number)

    try:
        result = await db.execute(stmt)
    except (SQLAlchemyError, OSError) as exc:
        logger.warning("Failed to load progress rows for {} exercises: {}", len(exercise_ids), exc)
        raise DataSourceUnavailable(str(exc), operation="load_progress_rows") from exc

    return [
        LoggedSetRow(
            exercise_id=r.exercise_id,
            log_id=r.log_id,
            log_name=r.log_name,
            start_time=r.start_time,
            end_time=r.end_time,
            set_id=r.set_id,
            set_number=r.set_number,
            reps=r.reps,
            weight=r.weight,
        )
        for r in result.all()
    ]


async def summarize_progress(
    db: AsyncSession,
    *,
    muscle_group: str | None = None,
    session_window: int | None = None,
) -> ProgressResult:
    """Weight summary for every exercise (optionally one muscle group). Never raises on read errors."""
    try:
        exercises = await load_exercises(db, muscle_group)
        rows = await load_progress_rows(db, [e.id for e in exercises], session_window=session_window)
    except DataSourceUnavailable as exc:
        return ProgressResult(error=exc)
    summaries = compute_progress_summaries(exercises, rows, session_window)
    logger.debug("Progress summary: {} of {} exercises have data", len(summaries), len(exercises))
    return ProgressResult(summaries=summaries)
