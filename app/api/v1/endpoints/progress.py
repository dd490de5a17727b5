"""Progress endpoints: weight summary, exercises with progress, weight history."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings, get_settings
from app.core.enums import MuscleGroup
from app.db.session import get_db
from app.schemas.progress import (
    ExerciseProgressRead,
    ExerciseProgressSummaryRead,
    WeightHistoryPointRead,
)
from app.services import progress as progress_service

router = APIRouter()


@router.get("/exercises-weight-summary", response_model=list[ExerciseProgressSummaryRead])
async def exercises_weight_summary(
    session_window: int | None = Query(None, ge=1, le=50),
    muscle_group: MuscleGroup | None = None,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Per exercise: max weight of the most recent completed session (last_weight) and the
    number of completed sessions with weight data among the last ``session_window``.
    Exercises without data are omitted. On a read failure this returns [] when
    PROGRESS_ON_ERROR=degrade and 503 when it is abort.
    """
    window = session_window or settings.progress_session_window
    result = await progress_service.summarize_progress(
        db,
        muscle_group=muscle_group.value if muscle_group else None,
        session_window=window,
    )
    if not result.ok:
        if settings.progress_on_error == "abort":
            return result.unwrap()
        logger.warning("Weight summary degraded to no data: {}", result.error)
    return result.summaries


@router.get("/exercises-with-progress", response_model=list[ExerciseProgressRead])
async def exercises_with_progress(
    muscle_group: MuscleGroup | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Exercises used with weight in completed sessions: last/max weight, last used, distinct training days."""
    exercises = await progress_service.load_exercises(db, muscle_group.value if muscle_group else None)
    rows = await progress_service.load_progress_rows(db, [e.id for e in exercises])
    return progress_service.compute_exercises_with_progress(exercises, rows)


@router.get("/exercises/{exercise_id}/weight-history", response_model=list[WeightHistoryPointRead])
async def exercise_weight_history(
    exercise_id: uuid.UUID,
    limit: int | None = Query(None, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Max weight per session for one exercise (unfinished sessions included), newest first."""
    if await progress_service.get_exercise(db, exercise_id) is None:
        raise HTTPException(status_code=404, detail="Exercise not found")
    rows = await progress_service.load_progress_rows(db, [exercise_id], completed_only=False)
    return progress_service.compute_weight_history(rows, limit or settings.weight_history_limit)
