"""Persistence for workouts, plans and preferences (async SQLAlchemy).

Records go in and come out as pydantic schemas; ORM rows never leave this
module. Constraint violations surface as ConflictError, any other database
failure as StorageError, while a missing record is returned as None / False.
"""

from __future__ import annotations

import functools
import logging
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from gym_tracker.core.config import get_settings
from gym_tracker.core.errors import ConflictError, StorageError
from gym_tracker.models import MachineDefaults as MachineDefaultsRow
from gym_tracker.models import Plan as PlanRow
from gym_tracker.models import PlanExercise as PlanExerciseRow
from gym_tracker.models import UserSettings as UserSettingsRow
from gym_tracker.models import Workout as WorkoutRow
from gym_tracker.models import WorkoutExercise as WorkoutExerciseRow
from gym_tracker.models import WorkoutSet as WorkoutSetRow
from gym_tracker.schemas.plan import Plan
from gym_tracker.schemas.settings import UserSettingsRead, UserSettingsUpdate
from gym_tracker.schemas.workout import MachineDefaults, Workout

logger = logging.getLogger(__name__)

SETTINGS_ROW_ID = 1


def _storage_call(fn):
    """Translate SQLAlchemy failures into ConflictError or StorageError."""

    @functools.wraps(fn)
    async def wrapper(self, *args, **kwargs):
        try:
            return await fn(self, *args, **kwargs)
        except IntegrityError as e:
            logger.warning("%s rejected: %s", fn.__name__, e.orig)
            raise ConflictError(f"{fn.__name__} conflicts with stored data: {e.orig}") from e
        except SQLAlchemyError as e:
            logger.exception("%s failed: %s", fn.__name__, e)
            raise StorageError(f"{fn.__name__} failed: {e}") from e

    return wrapper


def _aware(value: datetime | None) -> datetime | None:
    # SQLite drops tzinfo; stored instants are UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _workout_from_row(row: WorkoutRow) -> Workout:
    workout = Workout.model_validate(row)
    workout.start_time = _aware(workout.start_time)
    workout.end_time = _aware(workout.end_time)
    for exercise in workout.exercises:
        for set_ in exercise.sets:
            set_.completed_at = _aware(set_.completed_at)
    return workout


def _workout_children(workout: Workout) -> list[WorkoutExerciseRow]:
    return [
        WorkoutExerciseRow(
            id=exercise.id,
            position=i,
            machine_id=exercise.machine_id,
            machine_name=exercise.machine_name,
            attachment_id=exercise.attachment_id,
            grip=exercise.grip,
            notes=exercise.notes,
            sets=[
                WorkoutSetRow(
                    id=s.id,
                    position=j,
                    weight=s.weight,
                    reps=s.reps,
                    weight_unit=s.weight_unit,
                    rest_period=s.rest_period,
                    rpe=s.rpe,
                    is_completed=s.is_completed,
                    completed_at=s.completed_at,
                )
                for j, s in enumerate(exercise.sets)
            ],
        )
        for i, exercise in enumerate(workout.exercises)
    ]


def _plan_children(plan: Plan) -> list[PlanExerciseRow]:
    return [
        PlanExerciseRow(
            id=e.id,
            position=i,
            machine_id=e.machine_id,
            label=e.label,
            attachment_id=e.attachment_id,
            grip=e.grip,
        )
        for i, e in enumerate(plan.exercises)
    ]


class GymRepository:
    """Storage collaborator bound to one AsyncSession (one request / unit of work)."""

    def __init__(self, session: AsyncSession):
        self.session = session

    # ---- Workouts ----

    def _workouts_query(self):
        return select(WorkoutRow).options(
            selectinload(WorkoutRow.exercises).selectinload(WorkoutExerciseRow.sets)
        )

    async def _get_workout_row(self, workout_id: str) -> WorkoutRow | None:
        result = await self.session.execute(self._workouts_query().where(WorkoutRow.id == workout_id))
        return result.scalar_one_or_none()

    @_storage_call
    async def load_workouts(self) -> list[Workout]:
        """All workouts, oldest first."""
        result = await self.session.execute(self._workouts_query().order_by(WorkoutRow.start_time))
        return [_workout_from_row(r) for r in result.scalars().all()]

    @_storage_call
    async def load_workout(self, workout_id: str) -> Workout | None:
        row = await self._get_workout_row(workout_id)
        return _workout_from_row(row) if row else None

    @_storage_call
    async def load_workouts_with_machine(self, machine_id: str) -> list[Workout]:
        """Workouts containing the machine, oldest first (ready for the progress series)."""
        containing = select(WorkoutExerciseRow.workout_id).where(WorkoutExerciseRow.machine_id == machine_id)
        result = await self.session.execute(
            self._workouts_query().where(WorkoutRow.id.in_(containing)).order_by(WorkoutRow.start_time)
        )
        return [_workout_from_row(r) for r in result.scalars().all()]

    @_storage_call
    async def count_completed_workouts(self) -> int:
        result = await self.session.execute(
            select(func.count(WorkoutRow.id)).where(WorkoutRow.end_time.isnot(None))
        )
        return int(result.scalar() or 0)

    @_storage_call
    async def load_completed_workouts_page(self, page: int, page_size: int) -> list[Workout]:
        """Finished workouts, newest first. Pages start at 1."""
        result = await self.session.execute(
            self._workouts_query()
            .where(WorkoutRow.end_time.isnot(None))
            .order_by(WorkoutRow.start_time.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        return [_workout_from_row(r) for r in result.scalars().all()]

    @_storage_call
    async def save_workout(self, workout: Workout) -> Workout:
        """Insert or replace the whole record, exercises and sets in their given order."""
        row = await self._get_workout_row(workout.id)
        if row is None:
            row = WorkoutRow(id=workout.id)
            self.session.add(row)
        else:
            row.exercises.clear()
            await self.session.flush()
        row.date = workout.date
        row.start_time = workout.start_time
        row.end_time = workout.end_time
        row.notes = workout.notes
        row.plan_id = workout.plan_id
        row.exercises = _workout_children(workout)
        await self.session.flush()
        return workout

    @_storage_call
    async def delete_workout(self, workout_id: str) -> bool:
        row = await self._get_workout_row(workout_id)
        if row is None:
            return False
        await self.session.delete(row)
        await self.session.flush()
        return True

    # ---- Plans ----

    def _plans_query(self):
        return select(PlanRow).options(selectinload(PlanRow.exercises))

    async def _get_plan_row(self, plan_id: str) -> PlanRow | None:
        result = await self.session.execute(self._plans_query().where(PlanRow.id == plan_id))
        return result.scalar_one_or_none()

    @_storage_call
    async def load_plans(self) -> list[Plan]:
        result = await self.session.execute(self._plans_query().order_by(PlanRow.name))
        return [Plan.model_validate(r) for r in result.scalars().all()]

    @_storage_call
    async def load_plan(self, plan_id: str) -> Plan | None:
        row = await self._get_plan_row(plan_id)
        return Plan.model_validate(row) if row else None

    @_storage_call
    async def count_plans(self) -> int:
        result = await self.session.execute(select(func.count(PlanRow.id)))
        return int(result.scalar() or 0)

    @_storage_call
    async def save_plan(self, plan: Plan) -> Plan:
        """Insert or replace the plan and its exercises as one unit."""
        row = await self._get_plan_row(plan.id)
        if row is None:
            row = PlanRow(id=plan.id)
            self.session.add(row)
        else:
            row.exercises.clear()
            await self.session.flush()
        row.name = plan.name
        row.description = plan.description
        row.exercises = _plan_children(plan)
        await self.session.flush()
        return plan

    @_storage_call
    async def delete_plan(self, plan_id: str) -> bool:
        """Remove the plan together with all of its planned exercises."""
        row = await self._get_plan_row(plan_id)
        if row is None:
            return False
        await self.session.delete(row)
        await self.session.flush()
        return True

    async def seed_plans(self, plans: list[Plan]) -> None:
        for plan in plans:
            await self.save_plan(plan)

    # ---- Preferences ----

    @_storage_call
    async def get_machine_defaults(self, machine_id: str) -> MachineDefaults | None:
        row = await self.session.get(MachineDefaultsRow, machine_id)
        return MachineDefaults.model_validate(row) if row else None

    @_storage_call
    async def load_machine_defaults(self, machine_ids: list[str]) -> dict[str, MachineDefaults]:
        if not machine_ids:
            return {}
        result = await self.session.execute(
            select(MachineDefaultsRow).where(MachineDefaultsRow.machine_id.in_(machine_ids))
        )
        return {r.machine_id: MachineDefaults.model_validate(r) for r in result.scalars().all()}

    @_storage_call
    async def update_machine_defaults(self, defaults: MachineDefaults) -> MachineDefaults:
        row = await self.session.get(MachineDefaultsRow, defaults.machine_id)
        if row is None:
            row = MachineDefaultsRow(machine_id=defaults.machine_id)
            self.session.add(row)
        for k, v in defaults.model_dump(exclude={"machine_id"}).items():
            setattr(row, k, v)
        await self.session.flush()
        return defaults

    @_storage_call
    async def get_user_settings(self) -> UserSettingsRead:
        row = await self.session.get(UserSettingsRow, SETTINGS_ROW_ID)
        if row is None:
            settings = get_settings()
            return UserSettingsRead(
                default_weight_unit=settings.default_weight_unit,
                default_rest_period=settings.default_rest_period,
                e1rm_formula=settings.e1rm_formula,
            )
        return UserSettingsRead.model_validate(row)

    @_storage_call
    async def update_user_settings(self, payload: UserSettingsUpdate) -> UserSettingsRead:
        current = await self.get_user_settings()
        row = await self.session.get(UserSettingsRow, SETTINGS_ROW_ID)
        if row is None:
            row = UserSettingsRow(id=SETTINGS_ROW_ID, **current.model_dump())
            self.session.add(row)
        for k, v in payload.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(row, k, v)
        await self.session.flush()
        return UserSettingsRead.model_validate(row)
