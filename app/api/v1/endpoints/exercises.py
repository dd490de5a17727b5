"""Exercise CRUD endpoints."""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import MuscleGroup
from app.db.session import get_db
from app.models.exercise import Exercise
from app.models.workout_log import WorkoutLogExercise
from app.schemas.exercise import ExerciseCreate, ExerciseRead, ExerciseUpdate

router = APIRouter()


async def _exercise_or_404(db: AsyncSession, exercise_id: uuid.UUID) -> Exercise:
    exercise = await db.get(Exercise, exercise_id)
    if exercise is None:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise


@router.get("", response_model=list[ExerciseRead])
async def list_exercises(
    db: AsyncSession = Depends(get_db),
    muscle_group: MuscleGroup | None = None,
    skip: int = 0,
    limit: int = 100,
):
    """Exercises by name, optionally for one muscle group."""
    stmt = select(Exercise).order_by(Exercise.name)
    if muscle_group is not None:
        stmt = stmt.where(Exercise.muscle_group == muscle_group.value)
    result = await db.execute(stmt.offset(skip).limit(limit))
    return list(result.scalars().all())


@router.post("", response_model=ExerciseRead, status_code=201)
async def create_exercise(payload: ExerciseCreate, db: AsyncSession = Depends(get_db)):
    exercise = Exercise(**payload.model_dump(mode="json"))
    db.add(exercise)
    await db.flush()
    await db.refresh(exercise)
    return exercise


@router.get("/{exercise_id}", response_model=ExerciseRead)
async def get_exercise(exercise_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    return await _exercise_or_404(db, exercise_id)


@router.patch("/{exercise_id}", response_model=ExerciseRead)
async def update_exercise(
    exercise_id: uuid.UUID,
    payload: ExerciseUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Partial update; muscle_group must be one of the known groups."""
    exercise = await _exercise_or_404(db, exercise_id)
    data = payload.model_dump(mode="json", exclude_unset=True)
    for field in ("name", "muscle_group"):
        if field in data and data[field] is None:
            del data[field]
    for field, value in data.items():
        setattr(exercise, field, value)
    await db.flush()
    await db.refresh(exercise)
    return exercise


@router.delete("/{exercise_id}", status_code=204)
async def delete_exercise(exercise_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    """Delete an exercise and its template entries. Exercises already logged are kept (409)."""
    exercise = await _exercise_or_404(db, exercise_id)
    logged = await db.execute(
        select(WorkoutLogExercise.id).where(WorkoutLogExercise.exercise_id == exercise_id).limit(1)
    )
    if logged.first() is not None:
        raise HTTPException(status_code=409, detail="Exercise has logged sessions")
    await db.delete(exercise)
    return None
