"""Workout plans - create, edit exercise order, delete."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from gym_tracker.api.v1.deps import get_repository
from gym_tracker.core.config import get_settings
from gym_tracker.core.enums import MoveDirection
from gym_tracker.core.errors import IncompleteSelectionError
from gym_tracker.schemas.plan import Plan, PlanCreate, PlanUpdate, VariantSelection
from gym_tracker.services.catalog import Catalog, get_catalog, load_default_plans
from gym_tracker.services.plan_editor import (
    NeedsAttachment,
    NeedsGrip,
    append_exercise,
    move_exercise,
    remove_exercise,
    resolve_variant,
)
from gym_tracker.services.repository import GymRepository

router = APIRouter()
logger = logging.getLogger(__name__)


async def _get_plan_or_404(repo: GymRepository, plan_id: str) -> Plan:
    plan = await repo.load_plan(plan_id)
    if not plan:
        raise HTTPException(status_code=404, detail="Plan not found")
    return plan


@router.get("", response_model=list[Plan])
async def list_plans(repo: GymRepository = Depends(get_repository)):
    """List all plans. An empty store is seeded with the starter plans once."""
    settings = get_settings()
    if settings.seed_default_plans and await repo.count_plans() == 0:
        defaults = load_default_plans(settings.default_plans_path)
        await repo.seed_plans(defaults)
        logger.info("Seeded %d default plans", len(defaults))
    return await repo.load_plans()


@router.post("", response_model=Plan, status_code=201)
async def create_plan(payload: PlanCreate, repo: GymRepository = Depends(get_repository)):
    """Create an empty plan (add exercises via /plans/{id}/exercises)."""
    return await repo.save_plan(Plan(name=payload.name, description=payload.description))


@router.get("/{plan_id}", response_model=Plan)
async def get_plan(plan_id: str, repo: GymRepository = Depends(get_repository)):
    return await _get_plan_or_404(repo, plan_id)


@router.patch("/{plan_id}", response_model=Plan)
async def update_plan(plan_id: str, payload: PlanUpdate, repo: GymRepository = Depends(get_repository)):
    """Rename or re-describe a plan."""
    plan = await _get_plan_or_404(repo, plan_id)
    updated = plan.model_copy(update=payload.model_dump(exclude_unset=True, exclude_none=True))
    return await repo.save_plan(updated)


@router.delete("/{plan_id}", status_code=204)
async def delete_plan(plan_id: str, repo: GymRepository = Depends(get_repository)):
    """Delete a plan and all of its exercises."""
    if not await repo.delete_plan(plan_id):
        raise HTTPException(status_code=404, detail="Plan not found")
    return None


@router.post("/{plan_id}/exercises", response_model=Plan, status_code=201)
async def add_plan_exercise(
    plan_id: str,
    selection: VariantSelection,
    repo: GymRepository = Depends(get_repository),
    catalog: Catalog = Depends(get_catalog),
):
    """
    Append a machine variant at the end of the plan. Machines with a single
    variant resolve from machine_id alone; otherwise attachment_id and/or grip
    are required and a 409 lists the options still to choose from.
    """
    plan = await _get_plan_or_404(repo, plan_id)
    machine = catalog.require_machine(selection.machine_id)
    resolution = resolve_variant(machine, selection.attachment_id, selection.grip)
    if isinstance(resolution, NeedsAttachment):
        raise IncompleteSelectionError(machine.id, "attachment", list(resolution.options))
    if isinstance(resolution, NeedsGrip):
        raise IncompleteSelectionError(machine.id, "grip", [g.value for g in resolution.options])
    return await repo.save_plan(append_exercise(plan, resolution.variant.to_planned_exercise()))


@router.delete("/{plan_id}/exercises/{position}", response_model=Plan)
async def remove_plan_exercise(plan_id: str, position: int, repo: GymRepository = Depends(get_repository)):
    """Remove the exercise at `position`; later exercises move up."""
    plan = await _get_plan_or_404(repo, plan_id)
    try:
        updated = remove_exercise(plan, position)
    except IndexError:
        raise HTTPException(status_code=404, detail="No exercise at that position")
    return await repo.save_plan(updated)


@router.post("/{plan_id}/exercises/{position}/move", response_model=Plan)
async def move_plan_exercise(
    plan_id: str,
    position: int,
    direction: MoveDirection,
    repo: GymRepository = Depends(get_repository),
):
    """Swap with the neighbour above (up) or below (down). Boundary moves change nothing."""
    plan = await _get_plan_or_404(repo, plan_id)
    try:
        updated = move_exercise(plan, position, direction)
    except IndexError:
        raise HTTPException(status_code=404, detail="No exercise at that position")
    if updated is plan:
        return plan
    return await repo.save_plan(updated)
