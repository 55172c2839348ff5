"""Per-machine progress series across a workout history.

Workouts are expected in chronological order; the series follows input order
and does not sort. A workout contributes a point only when it contains at least
one exercise on the target machine. Several exercises on the same machine in one
workout (e.g. flat and incline bench) are merged into a single point.

Volume, max weight and best E1RM use completed sets only. total_sets and
total_reps count every logged set of the matched exercises, completed or not.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from itertools import islice

from gym_tracker.core.enums import E1RMFormula
from gym_tracker.schemas.progress import ProgressPoint
from gym_tracker.schemas.workout import Workout
from gym_tracker.services.e1rm import round_half_up
from gym_tracker.services.metrics import (
    calculate_exercise_volume,
    get_exercise_best_e1rm,
    get_exercise_max_weight,
)


def iter_exercise_progress(
    workouts: Sequence[Workout],
    machine_id: str,
    formula: E1RMFormula | str = E1RMFormula.BRZYCKI,
) -> Iterator[ProgressPoint]:
    for workout in workouts:
        matched = [e for e in workout.exercises if e.machine_id == machine_id]
        if not matched:
            continue
        yield ProgressPoint(
            date=workout.date,
            volume=sum((calculate_exercise_volume(e) for e in matched), 0),
            max_weight=max(get_exercise_max_weight(e) for e in matched),
            best_e1rm=round_half_up(max(get_exercise_best_e1rm(e, formula) for e in matched), 1),
            total_sets=sum(len(e.sets) for e in matched),
            total_reps=sum(s.reps for e in matched for s in e.sets),
        )


class ProgressSeries(Sequence):
    """Lazy, restartable view of `iter_exercise_progress`.

    Each iteration rescans the workouts. A non-negative integer index stops at
    that point; negative indexes, slices and len() walk the whole history, so
    loops over a large history should iterate rather than index.
    """

    def __init__(
        self,
        workouts: Sequence[Workout],
        machine_id: str,
        formula: E1RMFormula | str = E1RMFormula.BRZYCKI,
    ) -> None:
        self.workouts = workouts
        self.machine_id = machine_id
        self.formula = E1RMFormula(formula)

    def __iter__(self) -> Iterator[ProgressPoint]:
        return iter_exercise_progress(self.workouts, self.machine_id, self.formula)

    def __getitem__(self, index):
        if isinstance(index, int) and index >= 0:
            try:
                return next(islice(self, index, None))
            except StopIteration:
                raise IndexError("ProgressSeries index out of range") from None
        return list(self)[index]

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __eq__(self, other) -> bool:
        if isinstance(other, (ProgressSeries, list, tuple)):
            return list(self) == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"ProgressSeries(machine_id={self.machine_id!r}, points={list(self)!r})"


def get_exercise_progress_metrics(
    workouts: Sequence[Workout],
    machine_id: str,
    formula: E1RMFormula | str = E1RMFormula.BRZYCKI,
) -> ProgressSeries:
    """One ProgressPoint per workout containing `machine_id`; empty when it never appears."""
    return ProgressSeries(workouts, machine_id, formula)
