"""ORM models - import all so Base.metadata is complete for migrations."""

from gym_tracker.models.plan import Plan, PlanExercise
from gym_tracker.models.preferences import MachineDefaults, UserSettings
from gym_tracker.models.workout import Workout, WorkoutExercise, WorkoutSet

__all__ = [
    "MachineDefaults",
    "Plan",
    "PlanExercise",
    "UserSettings",
    "Workout",
    "WorkoutExercise",
    "WorkoutSet",
]
