from datetime import timedelta

import pytest

from gym_tracker.core.enums import GripType, WeightUnit
from gym_tracker.core.errors import IncompleteSelectionError, InvalidSelectionError, UnknownMachineError
from gym_tracker.schemas.plan import Plan, PlannedExercise
from gym_tracker.schemas.settings import UserSettingsRead
from gym_tracker.schemas.workout import MachineDefaults
from gym_tracker.services import session as workflow
from gym_tracker.services.e1rm import calculate_e1rm
from conftest import START


@pytest.fixture
def plan():
    return Plan(
        name="Upper",
        exercises=[
            PlannedExercise(machine_id="bench-press", label="Bench Press"),
            PlannedExercise(
                machine_id="lat-pulldown",
                label="Lat Pulldown — Wide Bar (pronated)",
                attachment_id="wide-bar",
                grip=GripType.PRONATED,
            ),
        ],
    )


def test_start_empty_workout():
    workout = workflow.start_workout(now=START)
    assert workout.date == "2025-03-01"
    assert workout.start_time == START
    assert workout.end_time is None
    assert workout.exercises == []


def test_start_from_plan_keeps_order_and_seeds_sets(plan, catalog):
    workout = workflow.start_workout(plan, catalog, now=START)
    assert workout.plan_id == plan.id
    assert [e.machine_id for e in workout.exercises] == ["bench-press", "lat-pulldown"]
    assert workout.exercises[1].attachment_id == "wide-bar"
    assert workout.exercises[1].grip == GripType.PRONATED

    first_set = workout.exercises[0].sets[0]
    assert (first_set.weight, first_set.reps, first_set.is_completed) == (0, 10, False)
    assert first_set.rest_period == 120  # bench press default rest


def test_start_from_plan_uses_machine_defaults(plan, catalog):
    defaults = {"bench-press": MachineDefaults(machine_id="bench-press", last_weight=80, last_reps=6, last_weight_unit="lbs")}
    user_settings = UserSettingsRead(default_weight_unit=WeightUnit.LBS, default_rest_period=45)
    workout = workflow.start_workout(plan, catalog, defaults, user_settings, now=START)

    bench_set = workout.exercises[0].sets[0]
    assert (bench_set.weight, bench_set.reps, bench_set.weight_unit) == (80, 6, WeightUnit.LBS)
    pulldown_set = workout.exercises[1].sets[0]
    assert pulldown_set.weight_unit == WeightUnit.LBS
    assert pulldown_set.rest_period == 90


def test_start_from_plan_requires_known_machines(catalog):
    plan = Plan(name="Odd", exercises=[PlannedExercise(machine_id="hover-board", label="Hover Board")])
    with pytest.raises(UnknownMachineError):
        workflow.start_workout(plan, catalog)
    with pytest.raises(ValueError):
        workflow.start_workout(plan)


def test_add_set_copies_previous(catalog):
    workout = workflow.start_workout(now=START)
    exercise = workflow.add_exercise(workout, catalog.require_machine("leg-press"))
    workflow.update_set(workout, exercise.id, exercise.sets[0].id, weight=140, reps=12)
    new_set = workflow.add_set(workout, exercise.id)
    assert (new_set.weight, new_set.reps) == (140, 12)
    assert new_set.id != exercise.sets[0].id
    assert len(workout.exercises[0].sets) == 2


def test_unknown_ids_raise_key_error(catalog):
    workout = workflow.start_workout(now=START)
    exercise = workflow.add_exercise(workout, catalog.require_machine("leg-press"))
    with pytest.raises(KeyError):
        workflow.add_set(workout, "missing")
    with pytest.raises(KeyError):
        workflow.complete_set(workout, exercise.id, "missing")


def test_update_set_validates_values(catalog):
    workout = workflow.start_workout(now=START)
    exercise = workflow.add_exercise(workout, catalog.require_machine("leg-press"))
    with pytest.raises(ValueError):
        workflow.update_set(workout, exercise.id, exercise.sets[0].id, weight=-5)


def test_remove_set_and_exercise(catalog):
    workout = workflow.start_workout(now=START)
    exercise = workflow.add_exercise(workout, catalog.require_machine("leg-press"))
    workflow.add_set(workout, exercise.id)
    workflow.remove_set(workout, exercise.id, exercise.sets[0].id)
    assert len(workout.exercises[0].sets) == 1
    workflow.remove_exercise(workout, exercise.id)
    assert workout.exercises == []


def test_complete_set_returns_smart_defaults(plan, catalog):
    workout = workflow.start_workout(plan, catalog, now=START)
    exercise = workout.exercises[1]
    set_ = exercise.sets[0]
    workflow.update_set(workout, exercise.id, set_.id, weight=65, reps=8)

    defaults = workflow.complete_set(workout, exercise.id, set_.id, now=START + timedelta(minutes=5))
    assert defaults == MachineDefaults(
        machine_id="lat-pulldown",
        last_weight=65,
        last_weight_unit=WeightUnit.KG,
        last_reps=8,
        last_attachment_id="wide-bar",
        last_grip=GripType.PRONATED,
    )
    completed = workout.exercises[1].sets[0]
    assert completed.is_completed
    assert completed.completed_at == START + timedelta(minutes=5)


def test_finish_and_summarize(plan, catalog):
    workout = workflow.start_workout(plan, catalog, now=START)
    bench = workout.exercises[0]
    workflow.update_set(workout, bench.id, bench.sets[0].id, weight=100, reps=5)
    workflow.complete_set(workout, bench.id, bench.sets[0].id)
    workflow.add_set(workout, bench.id)  # left incomplete

    workflow.finish_workout(workout, now=START + timedelta(minutes=75))
    summary = workflow.summarize_workout(workout)
    assert summary.exercise_count == 2
    assert summary.total_volume == 500
    assert summary.completed_sets == 1
    assert summary.duration == 75
    assert summary.formatted_duration == "1h 15min"
    assert summary.best_e1rm == calculate_e1rm(100, 5)


def test_workout_machines_counts_repeats(catalog):
    workout = workflow.start_workout(now=START)
    bench = catalog.require_machine("bench-press")
    workflow.add_exercise(workout, bench)
    workflow.add_exercise(workout, catalog.require_machine("leg-press"))
    workflow.add_exercise(workout, bench)
    usage = workflow.workout_machines(workout)
    assert [(u.id, u.count) for u in usage] == [("bench-press", 2), ("leg-press", 1)]
    assert usage[0].name == "Bench Press"


# ---- variant choice when adding an exercise ----


@pytest.mark.parametrize(
    "attachment_id,grip",
    [
        ("no-such-bar", None),
        ("wide-bar", "neutral"),
        ("no-such-bar", "mixed"),
    ],
)
def test_add_exercise_rejects_variants_the_machine_lacks(catalog, attachment_id, grip):
    workout = workflow.start_workout(now=START)
    with pytest.raises(InvalidSelectionError):
        workflow.add_exercise(workout, catalog.require_machine("lat-pulldown"), attachment_id, grip)
    assert workout.exercises == []


def test_add_exercise_grip_without_attachment_is_incomplete(catalog):
    workout = workflow.start_workout(now=START)
    with pytest.raises(IncompleteSelectionError) as exc_info:
        workflow.add_exercise(workout, catalog.require_machine("lat-pulldown"), grip="pronated")
    assert exc_info.value.missing == "attachment"
    with pytest.raises(InvalidSelectionError):
        workflow.add_exercise(workout, catalog.require_machine("bench-press"), grip="neutral")


def test_add_exercise_fills_single_option_variant(catalog):
    workout = workflow.start_workout(now=START)
    row = workflow.add_exercise(workout, catalog.require_machine("seated-cable-row"))
    assert (row.attachment_id, row.grip) == ("v-handle", GripType.NEUTRAL)
    handle = workflow.add_exercise(workout, catalog.require_machine("lat-pulldown"), "close-grip-handle")
    assert handle.grip == GripType.NEUTRAL
    bar = workflow.add_exercise(workout, catalog.require_machine("lat-pulldown"), "wide-bar")
    assert (bar.attachment_id, bar.grip) == ("wide-bar", None)


def test_add_exercise_reuses_remembered_variant(catalog):
    defaults = MachineDefaults(
        machine_id="lat-pulldown",
        last_weight=60,
        last_reps=10,
        last_attachment_id="close-grip-handle",
        last_grip=GripType.NEUTRAL,
    )
    workout = workflow.start_workout(now=START)
    exercise = workflow.add_exercise(workout, catalog.require_machine("lat-pulldown"), defaults=defaults)
    assert (exercise.attachment_id, exercise.grip) == ("close-grip-handle", GripType.NEUTRAL)


def test_remembered_grip_stays_with_its_attachment(catalog):
    defaults = MachineDefaults(
        machine_id="lat-pulldown",
        last_weight=60,
        last_reps=10,
        last_attachment_id="close-grip-handle",
        last_grip=GripType.NEUTRAL,
    )
    workout = workflow.start_workout(now=START)
    exercise = workflow.add_exercise(workout, catalog.require_machine("lat-pulldown"), "wide-bar", defaults=defaults)
    assert (exercise.attachment_id, exercise.grip) == ("wide-bar", None)
    assert (exercise.sets[0].weight, exercise.sets[0].reps) == (60, 10)


def test_stale_remembered_attachment_is_ignored(catalog):
    defaults = MachineDefaults(machine_id="lat-pulldown", last_attachment_id="retired-bar", last_grip=GripType.MIXED)
    workout = workflow.start_workout(now=START)
    exercise = workflow.add_exercise(workout, catalog.require_machine("lat-pulldown"), defaults=defaults)
    assert (exercise.attachment_id, exercise.grip) == (None, None)
