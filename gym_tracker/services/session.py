"""Active workout workflow: start, log sets, finish, summarize.

Works on `Workout` records in memory; the caller persists the result. All
statistics are delegated to the metrics module.
"""

from __future__ import annotations

from datetime import datetime, timezone

from gym_tracker.core.constants import DEFAULT_REPS, DEFAULT_WEIGHT
from gym_tracker.core.enums import E1RMFormula, GripType
from gym_tracker.core.errors import IncompleteSelectionError
from gym_tracker.schemas.catalog import Machine
from gym_tracker.schemas.plan import Plan
from gym_tracker.schemas.settings import UserSettingsRead
from gym_tracker.schemas.workout import (
    Exercise,
    MachineDefaults,
    MachineUsage,
    SetRecord,
    Workout,
    WorkoutSummary,
)
from gym_tracker.services.catalog import Catalog
from gym_tracker.services.metrics import (
    calculate_total_volume,
    calculate_workout_duration,
    count_completed_sets,
    format_duration,
    get_workout_best_e1rm,
)
from gym_tracker.services.plan_editor import NeedsGrip, Resolved, resolve_variant


def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)


def _initial_set(
    machine: Machine,
    defaults: MachineDefaults | None,
    user_settings: UserSettingsRead,
) -> SetRecord:
    """First set for a machine, pre-filled from the last time it was used."""
    return SetRecord(
        weight=defaults.last_weight if defaults else DEFAULT_WEIGHT,
        reps=defaults.last_reps if defaults and defaults.last_reps else DEFAULT_REPS,
        weight_unit=defaults.last_weight_unit if defaults else user_settings.default_weight_unit,
        rest_period=machine.default_rest_period or user_settings.default_rest_period,
    )


def _find_exercise(workout: Workout, exercise_id: str) -> Exercise:
    for exercise in workout.exercises:
        if exercise.id == exercise_id:
            return exercise
    raise KeyError(f"No exercise {exercise_id} in workout {workout.id}")


def _find_set(exercise: Exercise, set_id: str) -> SetRecord:
    for set_ in exercise.sets:
        if set_.id == set_id:
            return set_
    raise KeyError(f"No set {set_id} in exercise {exercise.id}")


def _choose_variant(
    machine: Machine,
    attachment_id: str | None,
    grip: GripType | str | None,
    defaults: MachineDefaults | None,
) -> tuple[str | None, GripType | None]:
    """Attachment and grip for a new exercise.

    Explicit choices must be offered by the machine (InvalidSelectionError
    otherwise). Missing ones fall back to the last variant used on the machine,
    the grip only while the attachment is the remembered one. Whatever is still
    open stays None unless the machine leaves a single option; a grip without
    an attachment on a multi-attachment machine is IncompleteSelectionError.
    """
    if grip is None and defaults is not None and defaults.last_attachment_id is not None:
        remembered = machine.get_attachment(defaults.last_attachment_id)
        if remembered is not None and attachment_id in (None, remembered.id):
            attachment_id = remembered.id
            if defaults.last_grip in remembered.grips:
                grip = defaults.last_grip

    resolution = resolve_variant(machine, attachment_id, grip)
    if isinstance(resolution, Resolved):
        return resolution.variant.attachment_id, resolution.variant.grip
    if isinstance(resolution, NeedsGrip):
        return resolution.attachment_id, None
    if grip is not None:
        raise IncompleteSelectionError(machine.id, "attachment", list(resolution.options))
    return None, None


def add_exercise(
    workout: Workout,
    machine: Machine,
    attachment_id: str | None = None,
    grip: GripType | None = None,
    defaults: MachineDefaults | None = None,
    user_settings: UserSettingsRead | None = None,
) -> Exercise:
    """Append an exercise on `machine` with one incomplete set."""
    user_settings = user_settings or UserSettingsRead()
    attachment_id, grip = _choose_variant(machine, attachment_id, grip, defaults)
    exercise = Exercise(
        machine_id=machine.id,
        machine_name=machine.name,
        attachment_id=attachment_id,
        grip=grip,
        sets=[_initial_set(machine, defaults, user_settings)],
    )
    workout.exercises.append(exercise)
    return exercise


def start_workout(
    plan: Plan | None = None,
    catalog: Catalog | None = None,
    defaults: dict[str, MachineDefaults] | None = None,
    user_settings: UserSettingsRead | None = None,
    now: datetime | None = None,
) -> Workout:
    """New open workout, empty or pre-filled with the plan's exercises in order.

    Planned machines missing from the catalog raise UnknownMachineError.
    """
    started = _now(now)
    workout = Workout(date=started.date().isoformat(), start_time=started, plan_id=plan.id if plan else None)
    if plan is None:
        return workout
    if catalog is None:
        raise ValueError("A catalog is required to start from a plan")
    defaults = defaults or {}
    for planned in plan.exercises:
        add_exercise(
            workout,
            catalog.require_machine(planned.machine_id),
            attachment_id=planned.attachment_id,
            grip=planned.grip,
            defaults=defaults.get(planned.machine_id),
            user_settings=user_settings,
        )
    return workout


def remove_exercise(workout: Workout, exercise_id: str) -> None:
    workout.exercises = [e for e in workout.exercises if e.id != exercise_id]


def add_set(workout: Workout, exercise_id: str, user_settings: UserSettingsRead | None = None) -> SetRecord:
    """Append a set copying weight/reps/unit/rest from the previous one."""
    user_settings = user_settings or UserSettingsRead()
    exercise = _find_exercise(workout, exercise_id)
    last = exercise.sets[-1] if exercise.sets else None
    set_ = SetRecord(
        weight=last.weight if last else DEFAULT_WEIGHT,
        reps=last.reps if last else DEFAULT_REPS,
        weight_unit=last.weight_unit if last else user_settings.default_weight_unit,
        rest_period=last.rest_period if last else user_settings.default_rest_period,
    )
    exercise.sets.append(set_)
    return set_


def update_set(workout: Workout, exercise_id: str, set_id: str, **changes) -> SetRecord:
    exercise = _find_exercise(workout, exercise_id)
    current = _find_set(exercise, set_id)
    updated = SetRecord.model_validate({**current.model_dump(), **changes, "id": set_id})
    exercise.sets = [updated if s.id == set_id else s for s in exercise.sets]
    return updated


def remove_set(workout: Workout, exercise_id: str, set_id: str) -> None:
    exercise = _find_exercise(workout, exercise_id)
    exercise.sets = [s for s in exercise.sets if s.id != set_id]


def complete_set(workout: Workout, exercise_id: str, set_id: str, now: datetime | None = None) -> MachineDefaults:
    """Mark a set done and return the smart defaults to remember for its machine."""
    exercise = _find_exercise(workout, exercise_id)
    set_ = _find_set(exercise, set_id)
    set_.is_completed = True
    set_.completed_at = _now(now)
    return MachineDefaults(
        machine_id=exercise.machine_id,
        last_weight=set_.weight,
        last_weight_unit=set_.weight_unit,
        last_reps=set_.reps,
        last_attachment_id=exercise.attachment_id,
        last_grip=exercise.grip,
    )


def finish_workout(workout: Workout, now: datetime | None = None) -> Workout:
    workout.end_time = _now(now)
    return workout


def summarize_workout(workout: Workout, formula: E1RMFormula | str = E1RMFormula.BRZYCKI) -> WorkoutSummary:
    duration = calculate_workout_duration(workout)
    return WorkoutSummary(
        id=workout.id,
        date=workout.date,
        exercise_count=len(workout.exercises),
        total_volume=calculate_total_volume(workout.exercises),
        duration=duration,
        formatted_duration=format_duration(duration),
        completed_sets=count_completed_sets(workout.exercises),
        best_e1rm=get_workout_best_e1rm(workout, formula),
    )


def workout_machines(workout: Workout) -> list[MachineUsage]:
    """Unique machines in the workout, first-seen order, with exercise counts."""
    usage: dict[str, MachineUsage] = {}
    for exercise in workout.exercises:
        if exercise.machine_id in usage:
            usage[exercise.machine_id].count += 1
        else:
            usage[exercise.machine_id] = MachineUsage(id=exercise.machine_id, name=exercise.machine_name, count=1)
    return list(usage.values())
