"""Workout log endpoints: sessions, their exercises and sets."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.constants import RECENT_WORKOUT_LOGS
from app.db.session import get_db
from app.models.exercise import Exercise
from app.models.template import WorkoutTemplateExercise
from app.models.workout_log import WorkoutLog, WorkoutLogExercise, WorkoutLogSet
from app.schemas.workout_log import (
    WorkoutLogCreate,
    WorkoutLogExerciseCreate,
    WorkoutLogExerciseRead,
    WorkoutLogRead,
    WorkoutLogReadWithExercises,
    WorkoutLogSetCreate,
    WorkoutLogSetRead,
    WorkoutLogSetUpdate,
    WorkoutLogSummary,
    WorkoutLogUpdate,
)
from app.services.workout_summary import build_workout_summary

router = APIRouter()


async def _get_log_or_404(db: AsyncSession, log_id: uuid.UUID, *, with_sets: bool = False) -> WorkoutLog:
    stmt = select(WorkoutLog).where(WorkoutLog.id == log_id)
    if with_sets:
        stmt = stmt.options(
            selectinload(WorkoutLog.exercises).selectinload(WorkoutLogExercise.sets),
            selectinload(WorkoutLog.exercises).selectinload(WorkoutLogExercise.exercise),
        )
    result = await db.execute(stmt)
    log = result.scalar_one_or_none()
    if not log:
        raise HTTPException(status_code=404, detail="Workout log not found")
    return log


@router.get("", response_model=list[WorkoutLogRead])
async def list_workout_logs(
    db: AsyncSession = Depends(get_db),
    recent: bool = False,
    skip: int = 0,
    limit: int = 50,
    from_date: datetime | None = None,
    to_date: datetime | None = None,
):
    """List workout logs newest first; recent=true returns only the latest five."""
    stmt = select(WorkoutLog)
    if from_date:
        stmt = stmt.where(WorkoutLog.start_time >= from_date)
    if to_date:
        stmt = stmt.where(WorkoutLog.start_time <= to_date)
    if recent:
        skip, limit = 0, RECENT_WORKOUT_LOGS
    stmt = stmt.order_by(WorkoutLog.start_time.desc()).offset(skip).limit(limit)
    result = await db.execute(stmt)
    return list(result.scalars().all())


@router.post("", response_model=WorkoutLogRead, status_code=201)
async def create_workout_log(
    payload: WorkoutLogCreate,
    db: AsyncSession = Depends(get_db),
):
    """Start a new workout session."""
    data = payload.model_dump(exclude_none=True)
    data.setdefault("start_time", datetime.now(timezone.utc))
    log = WorkoutLog(**data)
    db.add(log)
    await db.flush()
    await db.refresh(log)
    return log


@router.get("/{log_id}", response_model=WorkoutLogReadWithExercises)
async def get_workout_log(
    log_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get a workout log with its exercises and sets."""
    return await _get_log_or_404(db, log_id, with_sets=True)


@router.patch("/{log_id}", response_model=WorkoutLogRead)
async def update_workout_log(
    log_id: uuid.UUID,
    payload: WorkoutLogUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update a workout log. Setting end_time finishes the session."""
    log = await _get_log_or_404(db, log_id)
    data = payload.model_dump(exclude_unset=True)
    if "name" in data and data["name"] is None:
        del data["name"]
    if "start_time" in data and data["start_time"] is None:
        del data["start_time"]
    for k, v in data.items():
        setattr(log, k, v)
    await db.flush()
    await db.refresh(log)
    if data.get("end_time") is not None:
        logger.info("Workout log {} finished", log.id)
    return log


@router.delete("/{log_id}", status_code=204)
async def delete_workout_log(
    log_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Delete a workout log with its exercises and sets."""
    log = await _get_log_or_404(db, log_id)
    await db.delete(log)
    return None


@router.get("/{log_id}/summary", response_model=WorkoutLogSummary)
async def get_workout_log_summary(
    log_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Duration, exercises with sets, total sets and volume (estimated from the template if nothing was logged)."""
    log = await _get_log_or_404(db, log_id, with_sets=True)
    template_exercises = None
    if log.template_id is not None and not any(le.sets for le in log.exercises):
        result = await db.execute(
            select(WorkoutTemplateExercise)
            .where(WorkoutTemplateExercise.template_id == log.template_id)
            .options(selectinload(WorkoutTemplateExercise.exercise))
            .order_by(WorkoutTemplateExercise.order)
        )
        template_exercises = list(result.scalars().all())
    return build_workout_summary(log, template_exercises)


@router.post("/{log_id}/exercises", response_model=WorkoutLogExerciseRead, status_code=201)
async def add_log_exercise(
    log_id: uuid.UUID,
    payload: WorkoutLogExerciseCreate,
    db: AsyncSession = Depends(get_db),
):
    """Add an exercise to a session (the exercise name is copied onto the log entry)."""
    await _get_log_or_404(db, log_id)
    exercise = await db.get(Exercise, payload.exercise_id)
    if exercise is None:
        raise HTTPException(status_code=404, detail="Exercise not found")

    log_exercise = WorkoutLogExercise(
        log_id=log_id,
        exercise_id=exercise.id,
        exercise_name=exercise.name,
        order=payload.order,
    )
    db.add(log_exercise)
    await db.flush()
    result = await db.execute(
        select(WorkoutLogExercise)
        .where(WorkoutLogExercise.id == log_exercise.id)
        .options(selectinload(WorkoutLogExercise.sets))
    )
    return result.scalar_one()


@router.post("/{log_id}/exercises/{log_exercise_id}/sets", response_model=WorkoutLogSetRead, status_code=201)
async def add_log_set(
    log_id: uuid.UUID,
    log_exercise_id: uuid.UUID,
    payload: WorkoutLogSetCreate,
    db: AsyncSession = Depends(get_db),
):
    """Record a set for an exercise of this session."""
    result = await db.execute(
        select(WorkoutLogExercise.id).where(
            WorkoutLogExercise.id == log_exercise_id,
            WorkoutLogExercise.log_id == log_id,
        )
    )
    if result.scalar_one_or_none() is None:
        raise HTTPException(status_code=404, detail="Workout log exercise not found")

    set_ = WorkoutLogSet(log_exercise_id=log_exercise_id, **payload.model_dump())
    db.add(set_)
    await db.flush()
    await db.refresh(set_)
    return set_


@router.patch("/{log_id}/exercises/{log_exercise_id}/sets/{set_id}", response_model=WorkoutLogSetRead)
async def update_log_set(
    log_id: uuid.UUID,
    log_exercise_id: uuid.UUID,
    set_id: uuid.UUID,
    payload: WorkoutLogSetUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update reps, weight or completed flag of a set."""
    result = await db.execute(
        select(WorkoutLogSet)
        .join(WorkoutLogExercise, WorkoutLogExercise.id == WorkoutLogSet.log_exercise_id)
        .where(
            WorkoutLogSet.id == set_id,
            WorkoutLogSet.log_exercise_id == log_exercise_id,
            WorkoutLogExercise.log_id == log_id,
        )
    )
    set_ = result.scalar_one_or_none()
    if not set_:
        raise HTTPException(status_code=404, detail="Set not found")
    data = payload.model_dump(exclude_unset=True)
    # completed is NOT NULL; an explicit null leaves it unchanged
    if "completed" in data and data["completed"] is None:
        del data["completed"]
    for k, v in data.items():
        setattr(set_, k, v)
    await db.flush()
    await db.refresh(set_)
    return set_


@router.delete("/{log_id}/exercises/{log_exercise_id}/sets/{set_id}", status_code=204)
async def delete_log_set(
    log_id: uuid.UUID,
    log_exercise_id: uuid.UUID,
    set_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Delete a set."""
    result = await db.execute(
        select(WorkoutLogSet)
        .join(WorkoutLogExercise, WorkoutLogExercise.id == WorkoutLogSet.log_exercise_id)
        .where(
            WorkoutLogSet.id == set_id,
            WorkoutLogSet.log_exercise_id == log_exercise_id,
            WorkoutLogExercise.log_id == log_id,
        )
    )
    set_ = result.scalar_one_or_none()
    if not set_:
        raise HTTPException(status_code=404, detail="Set not found")
    await db.delete(set_)
    return None
