"""Progress and rest timer schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class ExerciseProgressSummaryRead(BaseModel):
    """Most recent session's max weight and completed-session count for one exercise."""

    model_config = ConfigDict(from_attributes=True)
    exercise_id: UUID
    name: str
    muscle_group: str | None = None
    last_weight: float
    session_count: int


class ExerciseProgressRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    exercise_id: UUID
    name: str
    muscle_group: str | None = None
    last_weight: float
    max_weight: float
    last_used: datetime
    total_sessions: int


class WeightHistoryPointRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    workout_log_id: UUID
    workout_date: datetime
    workout_name: str
    max_weight: float
    total_sets: int
    all_weights: list[float] = []


class RestTimerConfig(BaseModel):
    default_seconds: int
    default_display: str
    presets: list[int]
    adjust_steps: list[int]
