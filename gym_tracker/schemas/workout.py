"""Logged workout records: Workout -> Exercise -> SetRecord."""

from datetime import datetime
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from gym_tracker.core.enums import GripType, WeightUnit


def new_id() -> str:
    return uuid4().hex


class SetRecord(BaseModel):
    """One set. Only completed sets count towards volume, max weight and E1RM."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=new_id)
    weight: float = Field(0.0, ge=0)
    reps: int = Field(0, ge=0)
    weight_unit: WeightUnit = WeightUnit.KG
    rest_period: int = Field(60, ge=0)  # seconds
    rpe: float | None = Field(None, ge=0, le=10)
    is_completed: bool = False
    completed_at: datetime | None = None


class Exercise(BaseModel):
    """An exercise as logged in a workout. Several may share a machine_id."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=new_id)
    machine_id: str
    machine_name: str
    attachment_id: str | None = None
    grip: GripType | None = None
    notes: str | None = None
    sets: list[SetRecord] = []


class Workout(BaseModel):
    """A workout session. Duration is undefined until end_time is set."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=new_id)
    date: str  # calendar date, YYYY-MM-DD
    start_time: datetime
    end_time: datetime | None = None
    notes: str | None = None
    plan_id: str | None = None
    exercises: list[Exercise] = []

    @property
    def is_finished(self) -> bool:
        return self.end_time is not None


class WorkoutCreate(BaseModel):
    plan_id: str | None = None
    notes: str | None = None


class WorkoutSummary(BaseModel):
    id: str
    date: str
    exercise_count: int
    total_volume: float
    duration: int  # minutes
    formatted_duration: str
    completed_sets: int
    best_e1rm: float


class WorkoutPage(BaseModel):
    page: int
    page_size: int
    total: int
    total_pages: int
    items: list[WorkoutSummary] = []


class MachineUsage(BaseModel):
    """A machine appearing in a workout, with how many exercises used it."""

    id: str
    name: str
    count: int


class MachineDefaults(BaseModel):
    """Last used values per machine, used to pre-fill new sets."""

    model_config = ConfigDict(from_attributes=True)

    machine_id: str
    last_weight: float = 0.0
    last_weight_unit: WeightUnit = WeightUnit.KG
    last_reps: int = 0
    last_attachment_id: str | None = None
    last_grip: GripType | None = None


class ExerciseCreate(BaseModel):
    machine_id: str
    attachment_id: str | None = None
    grip: GripType | None = None


class SetUpdate(BaseModel):
    weight: float | None = Field(None, ge=0)
    reps: int | None = Field(None, ge=0)
    weight_unit: WeightUnit | None = None
    rest_period: int | None = Field(None, ge=0)
    rpe: float | None = Field(None, ge=0, le=10)
