"""Workout templates - save and reload workout structure."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.db.session import get_db
from app.models.exercise import Exercise
from app.models.template import WorkoutTemplate, WorkoutTemplateExercise
from app.models.workout_log import WorkoutLog
from app.schemas.template import (
    TemplateExerciseCreate,
    TemplateExerciseRead,
    TemplateExerciseUpdate,
    WorkoutTemplateCreate,
    WorkoutTemplateRead,
    WorkoutTemplateUpdate,
)
from app.schemas.workout_log import WorkoutLogRead

router = APIRouter()


def _template_query():
    return select(WorkoutTemplate).options(
        selectinload(WorkoutTemplate.exercises).selectinload(WorkoutTemplateExercise.exercise)
    )


async def _get_template_or_404(db: AsyncSession, template_id: uuid.UUID) -> WorkoutTemplate:
    result = await db.execute(_template_query().where(WorkoutTemplate.id == template_id))
    t = result.scalar_one_or_none()
    if not t:
        raise HTTPException(status_code=404, detail="Template not found")
    return t


@router.get("", response_model=list[WorkoutTemplateRead])
async def list_templates(
    db: AsyncSession = Depends(get_db),
    skip: int = 0,
    limit: int = 50,
):
    """List all workout templates."""
    result = await db.execute(
        _template_query().order_by(WorkoutTemplate.created_at.desc()).offset(skip).limit(limit)
    )
    return list(result.scalars().all())


@router.post("", response_model=WorkoutTemplateRead, status_code=201)
async def create_template(
    payload: WorkoutTemplateCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create an empty template (add exercises via /{template_id}/exercises)."""
    t = WorkoutTemplate(**payload.model_dump())
    db.add(t)
    await db.flush()
    return await _get_template_or_404(db, t.id)


@router.get("/{template_id}", response_model=WorkoutTemplateRead)
async def get_template(
    template_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get a template with its exercises."""
    return await _get_template_or_404(db, template_id)


@router.patch("/{template_id}", response_model=WorkoutTemplateRead)
async def update_template(
    template_id: uuid.UUID,
    payload: WorkoutTemplateUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update template name/description."""
    t = await _get_template_or_404(db, template_id)
    data = payload.model_dump(exclude_unset=True)
    if "name" in data and data["name"] is None:
        del data["name"]
    for k, v in data.items():
        setattr(t, k, v)
    await db.flush()
    return await _get_template_or_404(db, template_id)


@router.delete("/{template_id}", status_code=204)
async def delete_template(
    template_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Delete a template."""
    result = await db.execute(select(WorkoutTemplate).where(WorkoutTemplate.id == template_id))
    t = result.scalar_one_or_none()
    if not t:
        raise HTTPException(status_code=404, detail="Template not found")
    await db.delete(t)
    return None


@router.post("/{template_id}/exercises", response_model=TemplateExerciseRead, status_code=201)
async def add_template_exercise(
    template_id: uuid.UUID,
    payload: TemplateExerciseCreate,
    db: AsyncSession = Depends(get_db),
):
    """Add an exercise to a template."""
    result = await db.execute(select(WorkoutTemplate.id).where(WorkoutTemplate.id == template_id))
    if result.scalar_one_or_none() is None:
        raise HTTPException(status_code=404, detail="Template not found")
    exercise = await db.get(Exercise, payload.exercise_id)
    if exercise is None:
        raise HTTPException(status_code=404, detail="Exercise not found")

    te = WorkoutTemplateExercise(template_id=template_id, **payload.model_dump())
    db.add(te)
    await db.flush()
    result = await db.execute(
        select(WorkoutTemplateExercise)
        .where(WorkoutTemplateExercise.id == te.id)
        .options(selectinload(WorkoutTemplateExercise.exercise))
    )
    return result.scalar_one()


@router.patch("/{template_id}/exercises/{template_exercise_id}", response_model=TemplateExerciseRead)
async def update_template_exercise(
    template_id: uuid.UUID,
    template_exercise_id: uuid.UUID,
    payload: TemplateExerciseUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update sets/reps/weight/rest/order of a template exercise."""
    result = await db.execute(
        select(WorkoutTemplateExercise)
        .where(
            WorkoutTemplateExercise.id == template_exercise_id,
            WorkoutTemplateExercise.template_id == template_id,
        )
        .options(selectinload(WorkoutTemplateExercise.exercise))
    )
    te = result.scalar_one_or_none()
    if not te:
        raise HTTPException(status_code=404, detail="Template exercise not found")
    data = payload.model_dump(exclude_unset=True)
    for field in ("sets", "reps", "rest_duration_seconds", "order"):
        if field in data and data[field] is None:
            del data[field]
    for k, v in data.items():
        setattr(te, k, v)
    await db.flush()
    return te


@router.delete("/{template_id}/exercises/{template_exercise_id}", status_code=204)
async def delete_template_exercise(
    template_id: uuid.UUID,
    template_exercise_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Remove an exercise from a template."""
    result = await db.execute(
        select(WorkoutTemplateExercise).where(
            WorkoutTemplateExercise.id == template_exercise_id,
            WorkoutTemplateExercise.template_id == template_id,
        )
    )
    te = result.scalar_one_or_none()
    if not te:
        raise HTTPException(status_code=404, detail="Template exercise not found")
    await db.delete(te)
    return None


@router.post("/{template_id}/instantiate", response_model=WorkoutLogRead, status_code=201)
async def instantiate_template(
    template_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Start a new workout log from a template (exercises and sets are logged during the session)."""
    t = await _get_template_or_404(db, template_id)
    now = datetime.now(timezone.utc)
    log = WorkoutLog(template_id=t.id, name=f"{t.name} - {now:%d/%m/%Y}", start_time=now)
    db.add(log)
    await db.flush()
    await db.refresh(log)
    logger.info("Started workout log {} from template {}", log.id, t.id)
    return log
