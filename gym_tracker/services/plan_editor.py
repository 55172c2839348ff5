"""Plan editing: variant resolution and the cascading selection state machine.

Picking an exercise for a plan cascades machine -> attachment -> grip. Each
step is decided by `resolve_variant`, a pure function from the machine and the
choices made so far to one of:

- `Resolved`: the variant is unambiguous, a PlannedExercise can be appended;
- `NeedsAttachment`: the machine has several attachments and none was chosen;
- `NeedsGrip`: the attachment offers several grips and none was chosen.

The editor itself is an immutable `EditorSession` plus pure transition
functions returning the next session:

    IDLE -> PICKING_MACHINE -> [PICKING_VARIANT] -> RESOLVED -> PICKING_MACHINE ...

and either picking state may go to CANCELLED.

Selecting a machine with a single possible variant skips PICKING_VARIANT and
appends straight away. `PlanEditor` wraps a session for callers that prefer a
mutable object. Persistence happens outside, with the plan returned by
`to_plan()`.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict

from gym_tracker.core.constants import LABEL_SEPARATOR
from gym_tracker.core.enums import GripType, MoveDirection
from gym_tracker.core.errors import IncompleteSelectionError, InvalidSelectionError
from gym_tracker.schemas.catalog import Attachment, Machine
from gym_tracker.schemas.plan import Plan, PlannedExercise
from gym_tracker.services.catalog import Catalog

logger = logging.getLogger(__name__)


# ---- Variant resolution (pure) ----


class ResolvedVariant(BaseModel):
    model_config = ConfigDict(frozen=True)

    machine_id: str
    machine_name: str
    attachment_id: str | None = None
    attachment_name: str | None = None
    grip: GripType | None = None
    grip_choice: bool = False  # attachment offered more than one grip

    @property
    def label(self) -> str:
        label = self.machine_name
        if self.attachment_name:
            label += f"{LABEL_SEPARATOR}{self.attachment_name}"
            if self.grip_choice and self.grip is not None:
                label += f" ({self.grip.value})"
        return label

    def to_planned_exercise(self) -> PlannedExercise:
        return PlannedExercise(
            machine_id=self.machine_id,
            label=self.label,
            attachment_id=self.attachment_id,
            grip=self.grip,
        )


class Resolved(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["resolved"] = "resolved"
    variant: ResolvedVariant
    label: str


class NeedsAttachment(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["needs_attachment"] = "needs_attachment"
    machine_id: str
    options: tuple[str, ...]  # attachment ids


class NeedsGrip(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["needs_grip"] = "needs_grip"
    machine_id: str
    attachment_id: str
    options: tuple[GripType, ...]


Resolution = Union[Resolved, NeedsAttachment, NeedsGrip]


def count_variants(machine: Machine) -> int:
    """Number of distinct machine/attachment/grip combinations."""
    if not machine.attachments:
        return 1
    return sum(len(a.grips) for a in machine.attachments)


def _resolved(machine: Machine, attachment: Attachment | None = None, grip: GripType | None = None) -> Resolved:
    variant = ResolvedVariant(
        machine_id=machine.id,
        machine_name=machine.name,
        attachment_id=attachment.id if attachment else None,
        attachment_name=attachment.name if attachment else None,
        grip=grip,
        grip_choice=bool(attachment and len(attachment.grips) > 1),
    )
    return Resolved(variant=variant, label=variant.label)


def resolve_variant(
    machine: Machine,
    attachment_id: str | None = None,
    grip: GripType | str | None = None,
) -> Resolution:
    """Decide whether the choices so far pin down a single variant.

    Raises InvalidSelectionError for an attachment or grip the machine does not offer.
    """
    grip = GripType(grip) if grip is not None else None

    if not machine.attachments:
        if attachment_id is not None or grip is not None:
            raise InvalidSelectionError(f"{machine.name} has no attachments")
        return _resolved(machine)

    if attachment_id is not None:
        attachment = machine.get_attachment(attachment_id)
        if attachment is None:
            raise InvalidSelectionError(f"{machine.name} has no attachment {attachment_id!r}")
    elif len(machine.attachments) == 1:
        attachment = machine.attachments[0]
    else:
        return NeedsAttachment(machine_id=machine.id, options=tuple(a.id for a in machine.attachments))

    if grip is not None:
        if grip not in attachment.grips:
            raise InvalidSelectionError(f"{attachment.name} does not allow a {grip.value} grip")
    elif len(attachment.grips) == 1:
        grip = attachment.grips[0]
    else:
        return NeedsGrip(machine_id=machine.id, attachment_id=attachment.id, options=attachment.grips)

    return _resolved(machine, attachment, grip)


# ---- Plan sequence operations (pure) ----


def append_exercise(plan: Plan, exercise: PlannedExercise) -> Plan:
    return plan.model_copy(update={"exercises": [*plan.exercises, exercise]})


def _check_position(plan: Plan, position: int) -> None:
    if not 0 <= position < len(plan.exercises):
        raise IndexError(f"No exercise at position {position}")


def remove_exercise(plan: Plan, position: int) -> Plan:
    """Drop the entry at `position`; later entries shift down by one."""
    _check_position(plan, position)
    exercises = [e for i, e in enumerate(plan.exercises) if i != position]
    return plan.model_copy(update={"exercises": exercises})


def move_exercise(plan: Plan, position: int, direction: MoveDirection | str) -> Plan:
    """Swap with the neighbour above/below. No-op at the boundary."""
    _check_position(plan, position)
    target = position - 1 if MoveDirection(direction) is MoveDirection.UP else position + 1
    if not 0 <= target < len(plan.exercises):
        return plan
    exercises = list(plan.exercises)
    exercises[position], exercises[target] = exercises[target], exercises[position]
    return plan.model_copy(update={"exercises": exercises})


def reorder_exercise(plan: Plan, from_position: int, to_position: int) -> Plan:
    """Take the entry at `from_position` and insert it at `to_position`."""
    _check_position(plan, from_position)
    _check_position(plan, to_position)
    exercises = list(plan.exercises)
    exercises.insert(to_position, exercises.pop(from_position))
    return plan.model_copy(update={"exercises": exercises})


# ---- Editor state machine ----


class EditorState(str, Enum):
    IDLE = "idle"
    PICKING_MACHINE = "picking_machine"
    PICKING_VARIANT = "picking_variant"
    RESOLVED = "resolved"
    CANCELLED = "cancelled"


class EditorSession(BaseModel):
    """Snapshot of one editing session. Transitions return a new session."""

    model_config = ConfigDict(frozen=True)

    plan: Plan
    state: EditorState = EditorState.IDLE
    machine_id: str | None = None
    attachment_id: str | None = None
    pending: NeedsAttachment | NeedsGrip | None = None
    last_added: PlannedExercise | None = None


_CAN_BEGIN = (EditorState.IDLE, EditorState.RESOLVED, EditorState.CANCELLED)


def _require_state(session: EditorSession, *states: EditorState) -> None:
    if session.state not in states:
        raise InvalidSelectionError(f"Not allowed while {session.state.value}")


def start_session(plan: Plan) -> EditorSession:
    return EditorSession(plan=plan)


def begin_add(session: EditorSession) -> EditorSession:
    _require_state(session, *_CAN_BEGIN)
    return EditorSession(plan=session.plan, state=EditorState.PICKING_MACHINE)


def _apply(session: EditorSession, machine: Machine, resolution: Resolution) -> EditorSession:
    if isinstance(resolution, Resolved):
        added = resolution.variant.to_planned_exercise()
        logger.debug("Plan %s: appended %s", session.plan.id, added.label)
        return EditorSession(
            plan=append_exercise(session.plan, added),
            state=EditorState.RESOLVED,
            last_added=added,
        )
    logger.debug("Plan %s: %s for %s", session.plan.id, resolution.status, machine.id)
    return EditorSession(
        plan=session.plan,
        state=EditorState.PICKING_VARIANT,
        machine_id=machine.id,
        attachment_id=resolution.attachment_id if isinstance(resolution, NeedsGrip) else None,
        pending=resolution,
    )


def select_machine(session: EditorSession, catalog: Catalog, machine_id: str) -> EditorSession:
    """Pick a machine; auto-resolves when it has a single variant."""
    _require_state(session, EditorState.PICKING_MACHINE)
    machine = catalog.require_machine(machine_id)
    return _apply(session, machine, resolve_variant(machine))


def select_attachment(session: EditorSession, catalog: Catalog, attachment_id: str) -> EditorSession:
    _require_state(session, EditorState.PICKING_VARIANT)
    machine = catalog.require_machine(session.machine_id)
    return _apply(session, machine, resolve_variant(machine, attachment_id))


def select_grip(session: EditorSession, catalog: Catalog, grip: GripType | str) -> EditorSession:
    _require_state(session, EditorState.PICKING_VARIANT)
    machine = catalog.require_machine(session.machine_id)
    if session.attachment_id is None and len(machine.attachments) > 1:
        raise IncompleteSelectionError(machine.id, "attachment", [a.id for a in machine.attachments])
    return _apply(session, machine, resolve_variant(machine, session.attachment_id, grip))


def confirm(session: EditorSession, catalog: Catalog) -> EditorSession:
    """Commit the current choices; IncompleteSelectionError while something is missing."""
    _require_state(session, EditorState.PICKING_VARIANT)
    machine = catalog.require_machine(session.machine_id)
    resolution = resolve_variant(machine, session.attachment_id)
    if isinstance(resolution, NeedsAttachment):
        raise IncompleteSelectionError(machine.id, "attachment", list(resolution.options))
    if isinstance(resolution, NeedsGrip):
        raise IncompleteSelectionError(machine.id, "grip", [g.value for g in resolution.options])
    return _apply(session, machine, resolution)


def cancel(session: EditorSession) -> EditorSession:
    _require_state(session, EditorState.PICKING_MACHINE, EditorState.PICKING_VARIANT)
    return EditorSession(plan=session.plan, state=EditorState.CANCELLED)


def _with_plan(session: EditorSession, plan: Plan) -> EditorSession:
    return session.model_copy(update={"plan": plan})


class PlanEditor:
    """Mutable wrapper owning one in-progress plan. Not for concurrent use."""

    def __init__(self, catalog: Catalog, plan: Plan | None = None, name: str = "New Plan"):
        self.catalog = catalog
        self.session = start_session(plan if plan is not None else Plan(name=name))

    @property
    def state(self) -> EditorState:
        return self.session.state

    @property
    def exercises(self) -> list[PlannedExercise]:
        return list(self.session.plan.exercises)

    @property
    def pending(self) -> NeedsAttachment | NeedsGrip | None:
        return self.session.pending

    def _added(self, before: int) -> PlannedExercise | None:
        return self.session.last_added if len(self.session.plan.exercises) > before else None

    def begin_add(self) -> None:
        self.session = begin_add(self.session)

    def select_machine(self, machine_id: str) -> PlannedExercise | None:
        """Returns the appended exercise, or None while a variant choice is pending."""
        if self.session.state in _CAN_BEGIN:
            self.begin_add()
        before = len(self.session.plan.exercises)
        self.session = select_machine(self.session, self.catalog, machine_id)
        return self._added(before)

    def select_attachment(self, attachment_id: str) -> PlannedExercise | None:
        before = len(self.session.plan.exercises)
        self.session = select_attachment(self.session, self.catalog, attachment_id)
        return self._added(before)

    def select_grip(self, grip: GripType | str) -> PlannedExercise | None:
        before = len(self.session.plan.exercises)
        self.session = select_grip(self.session, self.catalog, grip)
        return self._added(before)

    def confirm(self) -> PlannedExercise:
        self.session = confirm(self.session, self.catalog)
        return self.session.last_added

    def cancel(self) -> None:
        self.session = cancel(self.session)

    def remove(self, position: int) -> None:
        self.session = _with_plan(self.session, remove_exercise(self.session.plan, position))

    def move_up(self, position: int) -> None:
        self.session = _with_plan(self.session, move_exercise(self.session.plan, position, MoveDirection.UP))

    def move_down(self, position: int) -> None:
        self.session = _with_plan(self.session, move_exercise(self.session.plan, position, MoveDirection.DOWN))

    def move(self, from_position: int, to_position: int) -> None:
        self.session = _with_plan(self.session, reorder_exercise(self.session.plan, from_position, to_position))

    def rename(self, name: str) -> None:
        self.session = _with_plan(self.session, Plan.model_validate({**self.session.plan.model_dump(), "name": name}))

    def to_plan(self) -> Plan:
        return self.session.plan.model_copy(update={"exercises": list(self.session.plan.exercises)})
