"""Calculator tools (pure logic, no DB)."""

from fastapi import APIRouter, Query

from gym_tracker.core.enums import E1RMFormula
from gym_tracker.schemas.progress import DurationRead, E1RMRead
from gym_tracker.services.e1rm import calculate_e1rm
from gym_tracker.services.metrics import format_duration

router = APIRouter()


@router.get("/e1rm", response_model=E1RMRead)
async def e1rm_calculator(
    weight: float = Query(..., ge=0),
    reps: int = Query(..., ge=0),
    formula: E1RMFormula = E1RMFormula.BRZYCKI,
):
    """
    Estimated one-rep max for weight x reps, rounded to one decimal.
    A single rep (or Brzycki at 37+ reps) returns the weight itself.
    """
    return E1RMRead(weight=weight, reps=reps, formula=formula, e1rm=calculate_e1rm(weight, reps, formula))


@router.get("/format-duration", response_model=DurationRead)
async def format_duration_tool(minutes: int = Query(..., ge=0)):
    return DurationRead(minutes=minutes, formatted=format_duration(minutes))
