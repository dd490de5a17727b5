"""Workout template schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.exercise import ExerciseRef


class TemplateExerciseBase(BaseModel):
    exercise_id: UUID
    sets: int = Field(..., ge=1, le=20)
    reps: str = Field(..., min_length=1, max_length=20)
    weight: float | None = Field(None, ge=0)
    rest_duration_seconds: int = Field(90, ge=0)
    order: int = 0

    @field_validator("reps", mode="before")
    @classmethod
    def reps_as_text(cls, v):
        # Accept 10 as well as "8-12"
        return str(v) if isinstance(v, int) else v


class TemplateExerciseCreate(TemplateExerciseBase):
    pass


class TemplateExerciseUpdate(BaseModel):
    sets: int | None = Field(None, ge=1, le=20)
    reps: str | None = Field(None, min_length=1, max_length=20)
    weight: float | None = Field(None, ge=0)
    rest_duration_seconds: int | None = Field(None, ge=0)
    order: int | None = None

    @field_validator("reps", mode="before")
    @classmethod
    def reps_as_text(cls, v):
        return str(v) if isinstance(v, int) else v


class TemplateExerciseRead(TemplateExerciseBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    template_id: UUID
    exercise: ExerciseRef | None = None


class WorkoutTemplateBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None


class WorkoutTemplateCreate(WorkoutTemplateBase):
    pass


class WorkoutTemplateUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None


class WorkoutTemplateRead(WorkoutTemplateBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    created_at: datetime
    exercises: list[TemplateExerciseRead] = []
