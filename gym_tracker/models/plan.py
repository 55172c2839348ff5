"""Workout plan - named, ordered list of exercises to start a workout from."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gym_tracker.core.enums import GripType
from gym_tracker.db.base import Base


class Plan(Base):
    """Saved plan (name + exercises in order). Deleting it deletes its exercises."""

    __tablename__ = "plans"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    exercises: Mapped[list["PlanExercise"]] = relationship(
        "PlanExercise",
        back_populates="plan",
        cascade="all, delete-orphan",
        order_by="PlanExercise.position",
    )


class PlanExercise(Base):
    """Resolved machine/attachment/grip variant at a position in a plan."""

    __tablename__ = "plan_exercises"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    plan_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("plans.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer, default=0)
    machine_id: Mapped[str] = mapped_column(String(100), nullable=False)
    label: Mapped[str] = mapped_column(String(255), nullable=False)
    attachment_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    grip: Mapped[GripType | None] = mapped_column(Enum(GripType, native_enum=False), nullable=True)

    plan: Mapped["Plan"] = relationship("Plan", back_populates="exercises")
