"""Exercise schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.core.enums import MuscleGroup


class ExerciseBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    muscle_group: MuscleGroup
    description: str | None = None
    image_url: str | None = Field(None, max_length=1000)
    video_url: str | None = Field(None, max_length=1000)


class ExerciseCreate(ExerciseBase):
    pass


class ExerciseUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    muscle_group: MuscleGroup | None = None
    description: str | None = None
    image_url: str | None = Field(None, max_length=1000)
    video_url: str | None = Field(None, max_length=1000)


class ExerciseRead(ExerciseBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    muscle_group: str
    created_at: datetime | None = None


class ExerciseRef(BaseModel):
    """Minimal exercise info for embedding (id + name + muscle group)."""

    model_config = ConfigDict(from_attributes=True)
    id: UUID
    name: str
    muscle_group: str
