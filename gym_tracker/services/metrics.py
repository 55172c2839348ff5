"""Workout metrics: volume, max weight, E1RM, set counts and duration.

Pure functions over in-memory records. Inputs are never mutated and nothing is
read from storage. Only completed sets contribute to volume, max weight and E1RM.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from gym_tracker.core.enums import E1RMFormula
from gym_tracker.schemas.workout import Exercise, SetRecord, Workout
from gym_tracker.services.e1rm import get_best_e1rm, round_half_up


def completed_sets(exercise: Exercise) -> list[SetRecord]:
    return [s for s in exercise.sets if s.is_completed]


def calculate_exercise_volume(exercise: Exercise) -> float:
    """Sum of weight x reps over completed sets."""
    return sum((s.weight * s.reps for s in completed_sets(exercise)), 0)


def calculate_total_volume(exercises: Iterable[Exercise]) -> float:
    return sum((calculate_exercise_volume(e) for e in exercises), 0)


def get_exercise_max_weight(exercise: Exercise) -> float:
    return max((s.weight for s in completed_sets(exercise)), default=0)


def get_max_weight(exercises: Iterable[Exercise]) -> float:
    return max((get_exercise_max_weight(e) for e in exercises), default=0)


def get_exercise_best_e1rm(exercise: Exercise, formula: E1RMFormula | str = E1RMFormula.BRZYCKI) -> float:
    return get_best_e1rm(completed_sets(exercise), formula)


def get_workout_best_e1rm(
    workout: Workout | Sequence[Exercise], formula: E1RMFormula | str = E1RMFormula.BRZYCKI
) -> float:
    """Best E1RM of any completed set in the workout (or in a list of exercises)."""
    exercises = workout.exercises if isinstance(workout, Workout) else workout
    return max((get_exercise_best_e1rm(e, formula) for e in exercises), default=0.0)


def count_completed_sets(exercises: Iterable[Exercise]) -> int:
    return sum(len(completed_sets(e)) for e in exercises)


def calculate_workout_duration(workout: Workout) -> int:
    """Whole minutes between start and end (half-up); 0 while the workout is open."""
    if workout.end_time is None:
        return 0
    minutes = (workout.end_time - workout.start_time).total_seconds() / 60
    return int(round_half_up(minutes))


def format_duration(minutes: int) -> str:
    """45 -> '45 min', 60 -> '1h', 75 -> '1h 15min'."""
    if minutes < 60:
        return f"{minutes} min"
    hours, mins = divmod(minutes, 60)
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}min"
