"""Workout plan schemas."""

from pydantic import BaseModel, ConfigDict, Field

from gym_tracker.core.enums import GripType
from gym_tracker.schemas.workout import new_id


class PlannedExercise(BaseModel):
    """A resolved variant placed in a plan. Its position is its index in `Plan.exercises`."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str = Field(default_factory=new_id)
    machine_id: str
    label: str
    attachment_id: str | None = None
    grip: GripType | None = None


class Plan(BaseModel):
    """Named, ordered, reusable list of planned exercises."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=new_id)
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    exercises: list[PlannedExercise] = []


class PlanCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None


class PlanUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None


class VariantSelection(BaseModel):
    """User choices for one machine; attachment/grip only when the machine needs them."""

    machine_id: str
    attachment_id: str | None = None
    grip: GripType | None = None
