"""Per-machine smart defaults and the single user settings row."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from gym_tracker.core.enums import E1RMFormula, GripType, WeightUnit
from gym_tracker.db.base import Base


class MachineDefaults(Base):
    """Last weight/reps/attachment/grip used on a machine, to pre-fill new sets."""

    __tablename__ = "machine_defaults"

    machine_id: Mapped[str] = mapped_column(String(100), primary_key=True)
    last_weight: Mapped[float] = mapped_column(Float, default=0.0)
    last_weight_unit: Mapped[WeightUnit] = mapped_column(Enum(WeightUnit, native_enum=False), default=WeightUnit.KG)
    last_reps: Mapped[int] = mapped_column(Integer, default=0)
    last_attachment_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_grip: Mapped[GripType | None] = mapped_column(Enum(GripType, native_enum=False), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )


class UserSettings(Base):
    """Display unit tag and default rest period. Single row (id=1)."""

    __tablename__ = "user_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=1)
    default_weight_unit: Mapped[WeightUnit] = mapped_column(Enum(WeightUnit, native_enum=False), default=WeightUnit.KG)
    default_rest_period: Mapped[int] = mapped_column(Integer, default=60)
    e1rm_formula: Mapped[E1RMFormula] = mapped_column(Enum(E1RMFormula, native_enum=False), default=E1RMFormula.BRZYCKI)
