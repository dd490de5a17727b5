"""Shared enums for models and API."""

from enum import Enum


class MuscleGroup(str, Enum):
    """Muscle group an exercise is filed under."""

    CHEST = "Chest"
    BACK = "Back"
    SHOULDERS = "Shoulders"
    BICEPS = "Biceps"
    TRICEPS = "Triceps"
    LEGS = "Legs"
    ABS = "Abs"
    CARDIO = "Cardio"


class TimerState(str, Enum):
    """Rest timer states."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


class NotificationKind(str, Enum):
    """Events pushed to a notification sink."""

    REST_COMPLETE = "rest_complete"
