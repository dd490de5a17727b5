"""WorkoutLog, WorkoutLogExercise and WorkoutLogSet models."""

from __future__ import annotations

from datetime import datetime, timezone
from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Index, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship
import uuid

from app.db.base import Base


class WorkoutLog(Base):
    """A logged workout session. The session is complete once end_time is set."""

    __tablename__ = "workout_logs"
    __table_args__ = (Index("ix_workout_logs_start_time", "start_time"),)

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    template_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("workout_templates.id", ondelete="SET NULL"), nullable=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    start_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    end_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    exercises: Mapped[list["WorkoutLogExercise"]] = relationship(
        "WorkoutLogExercise",
        back_populates="workout_log",
        cascade="all, delete-orphan",
        order_by="WorkoutLogExercise.order",
    )

    @property
    def completed(self) -> bool:
        return self.end_time is not None


class WorkoutLogExercise(Base):
    """One exercise performed within one session; exercise_name is copied at insert time."""

    __tablename__ = "workout_log_exercises"
    __table_args__ = (
        Index("ix_workout_log_exercises_log_id", "log_id"),
        Index("ix_workout_log_exercises_exercise_id", "exercise_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    log_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("workout_logs.id", ondelete="CASCADE"), nullable=False
    )
    exercise_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("exercises.id"), nullable=False
    )
    exercise_name: Mapped[str] = mapped_column(String(255), nullable=False)
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    workout_log: Mapped["WorkoutLog"] = relationship("WorkoutLog", back_populates="exercises")
    exercise: Mapped["Exercise"] = relationship("Exercise", back_populates="log_entries")
    sets: Mapped[list["WorkoutLogSet"]] = relationship(
        "WorkoutLogSet",
        back_populates="log_exercise",
        cascade="all, delete-orphan",
        order_by="WorkoutLogSet.set_number",
    )


class WorkoutLogSet(Base):
    """One recorded set. weight is null for sets logged without load (e.g. bodyweight)."""

    __tablename__ = "workout_log_sets"
    __table_args__ = (Index("ix_workout_log_sets_log_exercise_id", "log_exercise_id"),)

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    log_exercise_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("workout_log_exercises.id", ondelete="CASCADE"), nullable=False
    )
    set_number: Mapped[int] = mapped_column(Integer, nullable=False)
    reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    log_exercise: Mapped["WorkoutLogExercise"] = relationship("WorkoutLogExercise", back_populates="sets")
