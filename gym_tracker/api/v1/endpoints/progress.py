"""Per-machine progress over stored workouts."""

from fastapi import APIRouter, Depends

from gym_tracker.api.v1.deps import get_repository
from gym_tracker.core.enums import E1RMFormula
from gym_tracker.schemas.progress import ProgressRead
from gym_tracker.services.progress import get_exercise_progress_metrics
from gym_tracker.services.repository import GymRepository

router = APIRouter()


@router.get("/{machine_id}", response_model=ProgressRead)
async def get_machine_progress(
    machine_id: str,
    formula: E1RMFormula | None = None,
    repo: GymRepository = Depends(get_repository),
):
    """
    One point per workout containing the machine, oldest first: volume, max weight,
    best E1RM, total sets and reps. Unknown machines give an empty series.
    Formula defaults to the user's setting.
    """
    if formula is None:
        formula = (await repo.get_user_settings()).e1rm_formula
    workouts = await repo.load_workouts_with_machine(machine_id)
    series = get_exercise_progress_metrics(workouts, machine_id, formula)
    return ProgressRead(machine_id=machine_id, formula=formula, points=list(series))
