"""ORM models - import all so Base.metadata is complete for table creation."""

from app.models.exercise import Exercise
from app.models.template import WorkoutTemplate, WorkoutTemplateExercise
from app.models.workout_log import WorkoutLog, WorkoutLogExercise, WorkoutLogSet

__all__ = [
    "Exercise",
    "WorkoutLog",
    "WorkoutLogExercise",
    "WorkoutLogSet",
    "WorkoutTemplate",
    "WorkoutTemplateExercise",
]
