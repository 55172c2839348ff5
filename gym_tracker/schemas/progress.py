"""Progress series and calculator tool schemas."""

from pydantic import BaseModel

from gym_tracker.core.enums import E1RMFormula


class ProgressPoint(BaseModel):
    """Aggregate of one machine within one workout."""

    date: str
    volume: float
    max_weight: float
    best_e1rm: float
    total_sets: int
    total_reps: int


class ProgressRead(BaseModel):
    machine_id: str
    formula: E1RMFormula
    points: list[ProgressPoint] = []


class E1RMRead(BaseModel):
    weight: float
    reps: int
    formula: E1RMFormula
    e1rm: float


class DurationRead(BaseModel):
    minutes: int
    formatted: str
