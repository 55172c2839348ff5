"""Workout, WorkoutExercise and WorkoutSet models."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Enum, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gym_tracker.core.enums import GripType, WeightUnit
from gym_tracker.db.base import Base


class Workout(Base):
    """A single workout session. Open until end_time is set."""

    __tablename__ = "workouts"
    __table_args__ = (Index("ix_workouts_start_time", "start_time"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    date: Mapped[str] = mapped_column(String(10), nullable=False, index=True)  # YYYY-MM-DD
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    plan_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    exercises: Mapped[list["WorkoutExercise"]] = relationship(
        "WorkoutExercise",
        back_populates="workout",
        cascade="all, delete-orphan",
        order_by="WorkoutExercise.position",
    )


class WorkoutExercise(Base):
    """Exercise logged in a workout. Several rows in one workout may share machine_id."""

    __tablename__ = "workout_exercises"
    __table_args__ = (
        Index("ix_workout_exercises_workout_id", "workout_id"),
        Index("ix_workout_exercises_machine_id", "machine_id"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    workout_id: Mapped[str] = mapped_column(String(64), ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0)
    machine_id: Mapped[str] = mapped_column(String(100), nullable=False)
    machine_name: Mapped[str] = mapped_column(String(255), nullable=False)
    attachment_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    grip: Mapped[GripType | None] = mapped_column(Enum(GripType, native_enum=False), nullable=True)
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)

    workout: Mapped["Workout"] = relationship("Workout", back_populates="exercises")
    sets: Mapped[list["WorkoutSet"]] = relationship(
        "WorkoutSet",
        back_populates="exercise",
        cascade="all, delete-orphan",
        order_by="WorkoutSet.position",
    )


class WorkoutSet(Base):
    """One set: weight x reps with a display unit tag. Only completed sets count in metrics."""

    __tablename__ = "workout_sets"
    __table_args__ = (Index("ix_workout_sets_exercise_id", "exercise_id"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    exercise_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("workout_exercises.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, default=0)
    weight: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    reps: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    weight_unit: Mapped[WeightUnit] = mapped_column(Enum(WeightUnit, native_enum=False), default=WeightUnit.KG, nullable=False)
    rest_period: Mapped[int] = mapped_column(Integer, default=60, nullable=False)  # seconds
    rpe: Mapped[float | None] = mapped_column(Float, nullable=True)
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    exercise: Mapped["WorkoutExercise"] = relationship("WorkoutExercise", back_populates="sets")
