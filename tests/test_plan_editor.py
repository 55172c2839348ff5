import pytest

from gym_tracker.core.enums import GripType, MoveDirection
from gym_tracker.core.errors import IncompleteSelectionError, InvalidSelectionError, UnknownMachineError
from gym_tracker.schemas.plan import Plan, PlannedExercise
from gym_tracker.services import plan_editor as pe
from gym_tracker.services.plan_editor import EditorState, NeedsAttachment, NeedsGrip, PlanEditor, Resolved


def _plan(*labels):
    return Plan(name="Test", exercises=[PlannedExercise(machine_id=label, label=label) for label in labels])


def _labels(plan_or_exercises):
    exercises = plan_or_exercises.exercises if isinstance(plan_or_exercises, Plan) else plan_or_exercises
    return [e.label for e in exercises]


# ---- resolve_variant ----


def test_machine_without_attachments_resolves(catalog):
    result = pe.resolve_variant(catalog.require_machine("bench-press"))
    assert isinstance(result, Resolved)
    assert result.label == "Bench Press"
    assert result.variant.attachment_id is None


def test_single_attachment_single_grip_auto_resolves(catalog):
    result = pe.resolve_variant(catalog.require_machine("seated-cable-row"))
    assert isinstance(result, Resolved)
    assert result.variant.attachment_id == "v-handle"
    assert result.variant.grip == GripType.NEUTRAL
    assert result.label == "Seated Cable Row — V-Handle"


def test_several_attachments_need_attachment(catalog):
    result = pe.resolve_variant(catalog.require_machine("tricep-pushdown"))
    assert isinstance(result, NeedsAttachment)
    assert result.options == ("rope", "straight-bar", "v-bar")


def test_single_attachment_with_several_grips_needs_grip(catalog):
    result = pe.resolve_variant(catalog.require_machine("cable-crossover"))
    assert isinstance(result, NeedsGrip)
    assert result.attachment_id == "d-handle"
    assert GripType.PRONATED in result.options


def test_attachment_with_several_grips_needs_grip(catalog):
    result = pe.resolve_variant(catalog.require_machine("lat-pulldown"), "wide-bar")
    assert isinstance(result, NeedsGrip)
    assert result.options == (GripType.PRONATED, GripType.SUPINATED)


def test_label_includes_grip_only_when_there_was_a_choice(catalog):
    pulldown = catalog.require_machine("lat-pulldown")
    assert pe.resolve_variant(pulldown, "wide-bar", "pronated").label == "Lat Pulldown — Wide Bar (pronated)"
    assert pe.resolve_variant(pulldown, "close-grip-handle").label == "Lat Pulldown — Close Grip Handle"
    pushdown = catalog.require_machine("tricep-pushdown")
    assert pe.resolve_variant(pushdown, "rope").label == "Tricep Pushdown — Rope"


@pytest.mark.parametrize(
    "machine_id,attachment_id,grip",
    [
        ("tricep-pushdown", "chain", None),
        ("tricep-pushdown", "rope", "pronated"),
        ("bench-press", "rope", None),
        ("bench-press", None, "neutral"),
    ],
)
def test_choices_the_machine_does_not_offer_are_invalid(catalog, machine_id, attachment_id, grip):
    with pytest.raises(InvalidSelectionError):
        pe.resolve_variant(catalog.require_machine(machine_id), attachment_id, grip)


def test_count_variants(catalog):
    assert pe.count_variants(catalog.require_machine("bench-press")) == 1
    assert pe.count_variants(catalog.require_machine("seated-cable-row")) == 1
    assert pe.count_variants(catalog.require_machine("tricep-pushdown")) == 4
    assert pe.count_variants(catalog.require_machine("pull-up-station")) == 5


# ---- sequence operations ----


def test_append_keeps_input_plan_untouched():
    plan = _plan("a")
    updated = pe.append_exercise(plan, PlannedExercise(machine_id="b", label="b"))
    assert _labels(plan) == ["a"]
    assert _labels(updated) == ["a", "b"]


def test_remove_shifts_later_entries():
    assert _labels(pe.remove_exercise(_plan("a", "b", "c"), 1)) == ["a", "c"]
    with pytest.raises(IndexError):
        pe.remove_exercise(_plan("a"), 1)


def test_move_swaps_with_neighbour():
    plan = _plan("a", "b", "c")
    assert _labels(pe.move_exercise(plan, 1, MoveDirection.UP)) == ["b", "a", "c"]
    assert _labels(pe.move_exercise(plan, 1, "down")) == ["a", "c", "b"]


def test_move_at_boundary_is_noop():
    plan = _plan("a", "b", "c")
    assert pe.move_exercise(plan, 0, MoveDirection.UP) is plan
    assert pe.move_exercise(plan, 2, MoveDirection.DOWN) is plan
    assert _labels(plan) == ["a", "b", "c"]


def test_reorder_moves_entry_to_target_position():
    assert _labels(pe.reorder_exercise(_plan("a", "b", "c", "d"), 0, 2)) == ["b", "c", "a", "d"]
    assert _labels(pe.reorder_exercise(_plan("a", "b", "c", "d"), 3, 0)) == ["d", "a", "b", "c"]


# ---- state machine ----


def test_transitions_auto_resolve_single_variant(catalog):
    session = pe.begin_add(pe.start_session(_plan()))
    assert session.state is EditorState.PICKING_MACHINE

    session = pe.select_machine(session, catalog, "leg-press")
    assert session.state is EditorState.RESOLVED
    assert session.last_added.label == "Leg Press"
    assert _labels(session.plan) == ["Leg Press"]


def test_transitions_cascade_attachment_then_grip(catalog):
    session = pe.begin_add(pe.start_session(_plan()))
    session = pe.select_machine(session, catalog, "lat-pulldown")
    assert session.state is EditorState.PICKING_VARIANT
    assert isinstance(session.pending, NeedsAttachment)
    assert session.plan.exercises == []

    session = pe.select_attachment(session, catalog, "wide-bar")
    assert session.state is EditorState.PICKING_VARIANT
    assert isinstance(session.pending, NeedsGrip)

    session = pe.select_grip(session, catalog, GripType.SUPINATED)
    assert session.state is EditorState.RESOLVED
    assert _labels(session.plan) == ["Lat Pulldown — Wide Bar (supinated)"]


def test_transitions_reject_wrong_state(catalog):
    idle = pe.start_session(_plan())
    with pytest.raises(InvalidSelectionError):
        pe.select_machine(idle, catalog, "bench-press")
    with pytest.raises(InvalidSelectionError):
        pe.cancel(idle)
    picking = pe.begin_add(idle)
    with pytest.raises(InvalidSelectionError):
        pe.begin_add(picking)


def test_confirm_reports_what_is_missing(catalog):
    session = pe.select_machine(pe.begin_add(pe.start_session(_plan())), catalog, "tricep-pushdown")
    with pytest.raises(IncompleteSelectionError) as exc_info:
        pe.confirm(session, catalog)
    assert exc_info.value.missing == "attachment"
    assert exc_info.value.options == ["rope", "straight-bar", "v-bar"]

    session = pe.select_attachment(session, catalog, "straight-bar")
    with pytest.raises(IncompleteSelectionError) as exc_info:
        pe.confirm(session, catalog)
    assert exc_info.value.missing == "grip"


def test_grip_before_attachment_is_incomplete(catalog):
    session = pe.select_machine(pe.begin_add(pe.start_session(_plan())), catalog, "tricep-pushdown")
    with pytest.raises(IncompleteSelectionError):
        pe.select_grip(session, catalog, "neutral")


def test_cancel_keeps_plan(catalog):
    session = pe.select_machine(pe.begin_add(pe.start_session(_plan("a"))), catalog, "lat-pulldown")
    session = pe.cancel(session)
    assert session.state is EditorState.CANCELLED
    assert _labels(session.plan) == ["a"]
    assert pe.begin_add(session).state is EditorState.PICKING_MACHINE


# ---- PlanEditor wrapper ----


def test_editor_single_variant_machine_appends_without_prompt(catalog):
    editor = PlanEditor(catalog)
    added = editor.select_machine("seated-cable-row")
    assert added is not None
    assert editor.pending is None
    assert _labels(editor.exercises) == ["Seated Cable Row — V-Handle"]


def test_editor_two_attachment_machine_waits_for_choice(catalog):
    editor = PlanEditor(catalog)
    assert editor.select_machine("tricep-pushdown") is None
    assert editor.exercises == []
    assert editor.state is EditorState.PICKING_VARIANT

    added = editor.select_attachment("rope")
    assert added.label == "Tricep Pushdown — Rope"
    assert len(editor.exercises) == 1


def test_editor_builds_and_reorders_a_plan(catalog):
    editor = PlanEditor(catalog, name="Push")
    editor.select_machine("bench-press")
    editor.select_machine("incline-bench-press")
    editor.select_machine("pec-fly")
    editor.select_machine("cable-crossover")
    editor.select_grip("neutral")

    editor.move_up(0)
    editor.move_down(3)
    assert _labels(editor.exercises) == [
        "Bench Press",
        "Incline Bench Press",
        "Nautilus Nitro Plus Pec Fly",
        "Cable Crossover — D-Handle (neutral)",
    ]
    editor.move_up(1)
    editor.remove(2)
    editor.move(2, 0)
    editor.rename("Chest Day")

    plan = editor.to_plan()
    assert plan.name == "Chest Day"
    assert _labels(plan) == ["Cable Crossover — D-Handle (neutral)", "Incline Bench Press", "Bench Press"]


def test_editor_single_grip_attachment_resolves(catalog):
    editor = PlanEditor(catalog, plan=_plan("a"))
    editor.select_machine("pull-up-station")
    editor.select_attachment("dip-bars")
    assert _labels(editor.exercises) == ["a", "Pull-up Station — Dip Bars"]
    assert editor.state is EditorState.RESOLVED


def test_editor_unknown_machine(catalog):
    editor = PlanEditor(catalog)
    with pytest.raises(UnknownMachineError):
        editor.select_machine("hover-board")
