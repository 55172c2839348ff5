"""Workout logging endpoints: start, log sets, finish, history."""

from __future__ import annotations

import math

from fastapi import APIRouter, Depends, HTTPException, Query

from gym_tracker.api.v1.deps import get_repository
from gym_tracker.core.constants import DEFAULT_PAGE_SIZE
from gym_tracker.schemas.workout import (
    ExerciseCreate,
    MachineUsage,
    SetRecord,
    SetUpdate,
    Workout,
    WorkoutCreate,
    WorkoutPage,
    WorkoutSummary,
)
from gym_tracker.services import session as workflow
from gym_tracker.services.catalog import Catalog, get_catalog
from gym_tracker.services.repository import GymRepository

router = APIRouter()


async def _get_workout_or_404(repo: GymRepository, workout_id: str) -> Workout:
    workout = await repo.load_workout(workout_id)
    if not workout:
        raise HTTPException(status_code=404, detail="Workout not found")
    return workout


@router.get("", response_model=WorkoutPage)
async def list_workouts(
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=100),
    repo: GymRepository = Depends(get_repository),
):
    """History: finished workouts, newest first, with their summaries."""
    settings = await repo.get_user_settings()
    total = await repo.count_completed_workouts()
    workouts = await repo.load_completed_workouts_page(page, page_size)
    return WorkoutPage(
        page=page,
        page_size=page_size,
        total=total,
        total_pages=math.ceil(total / page_size),
        items=[workflow.summarize_workout(w, settings.e1rm_formula) for w in workouts],
    )


@router.post("", response_model=Workout, status_code=201)
async def create_workout(
    payload: WorkoutCreate,
    repo: GymRepository = Depends(get_repository),
    catalog: Catalog = Depends(get_catalog),
):
    """Start a workout, empty or from a plan (sets pre-filled from machine defaults)."""
    plan = None
    defaults = {}
    if payload.plan_id:
        plan = await repo.load_plan(payload.plan_id)
        if not plan:
            raise HTTPException(status_code=404, detail="Plan not found")
        defaults = await repo.load_machine_defaults([e.machine_id for e in plan.exercises])
    user_settings = await repo.get_user_settings()
    workout = workflow.start_workout(plan, catalog, defaults, user_settings)
    workout.notes = payload.notes
    return await repo.save_workout(workout)


@router.get("/{workout_id}", response_model=Workout)
async def get_workout(workout_id: str, repo: GymRepository = Depends(get_repository)):
    return await _get_workout_or_404(repo, workout_id)


@router.put("/{workout_id}", response_model=Workout)
async def save_workout(workout_id: str, payload: Workout, repo: GymRepository = Depends(get_repository)):
    """Replace the whole record (exercises and sets in the given order)."""
    if payload.id != workout_id:
        raise HTTPException(status_code=400, detail="Workout id does not match the URL")
    return await repo.save_workout(payload)


@router.delete("/{workout_id}", status_code=204)
async def delete_workout(workout_id: str, repo: GymRepository = Depends(get_repository)):
    if not await repo.delete_workout(workout_id):
        raise HTTPException(status_code=404, detail="Workout not found")
    return None


@router.post("/{workout_id}/finish", response_model=WorkoutSummary)
async def finish_workout(workout_id: str, repo: GymRepository = Depends(get_repository)):
    """Stamp end_time and return the summary."""
    workout = await _get_workout_or_404(repo, workout_id)
    if workout.is_finished:
        raise HTTPException(status_code=409, detail="Workout already finished")
    workflow.finish_workout(workout)
    await repo.save_workout(workout)
    settings = await repo.get_user_settings()
    return workflow.summarize_workout(workout, settings.e1rm_formula)


@router.get("/{workout_id}/summary", response_model=WorkoutSummary)
async def get_workout_summary(workout_id: str, repo: GymRepository = Depends(get_repository)):
    workout = await _get_workout_or_404(repo, workout_id)
    settings = await repo.get_user_settings()
    return workflow.summarize_workout(workout, settings.e1rm_formula)


@router.get("/{workout_id}/machines", response_model=list[MachineUsage])
async def get_workout_machines(workout_id: str, repo: GymRepository = Depends(get_repository)):
    """Machines used in the workout with how many exercises each."""
    return workflow.workout_machines(await _get_workout_or_404(repo, workout_id))


# ---- Exercises and sets ----


@router.post("/{workout_id}/exercises", response_model=Workout, status_code=201)
async def add_workout_exercise(
    workout_id: str,
    payload: ExerciseCreate,
    repo: GymRepository = Depends(get_repository),
    catalog: Catalog = Depends(get_catalog),
):
    """Add a machine to the workout with one set pre-filled from its last use."""
    workout = await _get_workout_or_404(repo, workout_id)
    machine = catalog.require_machine(payload.machine_id)
    workflow.add_exercise(
        workout,
        machine,
        attachment_id=payload.attachment_id,
        grip=payload.grip,
        defaults=await repo.get_machine_defaults(machine.id),
        user_settings=await repo.get_user_settings(),
    )
    return await repo.save_workout(workout)


@router.delete("/{workout_id}/exercises/{exercise_id}", response_model=Workout)
async def remove_workout_exercise(workout_id: str, exercise_id: str, repo: GymRepository = Depends(get_repository)):
    workout = await _get_workout_or_404(repo, workout_id)
    if not any(e.id == exercise_id for e in workout.exercises):
        raise HTTPException(status_code=404, detail="Exercise not found")
    workflow.remove_exercise(workout, exercise_id)
    return await repo.save_workout(workout)


@router.post("/{workout_id}/exercises/{exercise_id}/sets", response_model=SetRecord, status_code=201)
async def add_workout_set(workout_id: str, exercise_id: str, repo: GymRepository = Depends(get_repository)):
    """Append a set copying weight, reps, unit and rest from the previous one."""
    workout = await _get_workout_or_404(repo, workout_id)
    try:
        set_ = workflow.add_set(workout, exercise_id, await repo.get_user_settings())
    except KeyError:
        raise HTTPException(status_code=404, detail="Exercise not found")
    await repo.save_workout(workout)
    return set_


@router.patch("/{workout_id}/exercises/{exercise_id}/sets/{set_id}", response_model=SetRecord)
async def update_workout_set(
    workout_id: str,
    exercise_id: str,
    set_id: str,
    payload: SetUpdate,
    repo: GymRepository = Depends(get_repository),
):
    workout = await _get_workout_or_404(repo, workout_id)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    try:
        set_ = workflow.update_set(workout, exercise_id, set_id, **changes)
    except KeyError:
        raise HTTPException(status_code=404, detail="Set not found")
    await repo.save_workout(workout)
    return set_


@router.delete("/{workout_id}/exercises/{exercise_id}/sets/{set_id}", status_code=204)
async def delete_workout_set(
    workout_id: str,
    exercise_id: str,
    set_id: str,
    repo: GymRepository = Depends(get_repository),
):
    workout = await _get_workout_or_404(repo, workout_id)
    try:
        workflow.remove_set(workout, exercise_id, set_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Exercise not found")
    await repo.save_workout(workout)
    return None


@router.post("/{workout_id}/exercises/{exercise_id}/sets/{set_id}/complete", response_model=SetRecord)
async def complete_workout_set(
    workout_id: str,
    exercise_id: str,
    set_id: str,
    repo: GymRepository = Depends(get_repository),
):
    """Mark the set done and remember its weight/reps as the machine's defaults."""
    workout = await _get_workout_or_404(repo, workout_id)
    try:
        defaults = workflow.complete_set(workout, exercise_id, set_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Set not found")
    await repo.save_workout(workout)
    await repo.update_machine_defaults(defaults)
    exercise = next(e for e in workout.exercises if e.id == exercise_id)
    return next(s for s in exercise.sets if s.id == set_id)
