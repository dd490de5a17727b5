"""WorkoutLog, WorkoutLogExercise and WorkoutLogSet schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class WorkoutLogSetBase(BaseModel):
    set_number: int = Field(..., ge=1)
    reps: int | None = Field(None, ge=0)
    weight: float | None = Field(None, ge=0)
    completed: bool = False


class WorkoutLogSetCreate(WorkoutLogSetBase):
    pass


class WorkoutLogSetUpdate(BaseModel):
    reps: int | None = Field(None, ge=0)
    weight: float | None = Field(None, ge=0)
    completed: bool | None = None


class WorkoutLogSetRead(WorkoutLogSetBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    log_exercise_id: UUID


class WorkoutLogExerciseCreate(BaseModel):
    exercise_id: UUID
    order: int = Field(1, ge=0)


class WorkoutLogExerciseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    log_id: UUID
    exercise_id: UUID
    exercise_name: str
    order: int
    sets: list[WorkoutLogSetRead] = []


class WorkoutLogBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    template_id: UUID | None = None


class WorkoutLogCreate(WorkoutLogBase):
    start_time: datetime | None = None
    end_time: datetime | None = None


class WorkoutLogUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    start_time: datetime | None = None
    end_time: datetime | None = None


class WorkoutLogRead(WorkoutLogBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    start_time: datetime
    end_time: datetime | None = None
    completed: bool = False


class WorkoutLogReadWithExercises(WorkoutLogRead):
    """Workout log with nested exercises and their sets (detail view)."""

    exercises: list[WorkoutLogExerciseRead] = []


class SummarySet(BaseModel):
    id: UUID
    set_number: int
    reps: int | None = None
    weight: float | None = None
    completed: bool = False


class SummaryExercise(BaseModel):
    id: UUID
    name: str
    muscle_group: str | None = None
    sets: list[SummarySet] = []


class WorkoutLogSummary(BaseModel):
    id: UUID
    name: str
    start_time: datetime
    end_time: datetime | None = None
    completed: bool
    duration: str
    exercises: list[SummaryExercise] = []
    total_sets: int
    total_volume: float
