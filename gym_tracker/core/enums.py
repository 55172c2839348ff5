"""Shared enums for catalog, records and API."""

from enum import Enum


class WeightUnit(str, Enum):
    """Display unit tag stored with every set. No conversion is performed."""

    KG = "kg"
    LBS = "lbs"


class WeightType(str, Enum):
    """How a machine is loaded."""

    STACK = "stack"
    PLATES = "plates"
    BODYWEIGHT = "bodyweight"
    CABLE = "cable"


class GripType(str, Enum):
    """Hand orientation on an attachment."""

    PRONATED = "pronated"
    SUPINATED = "supinated"
    NEUTRAL = "neutral"
    MIXED = "mixed"


class RoomLocation(str, Enum):
    """Gym areas a machine can live in."""

    MAIN_ROOM = "Main Room"
    LEG_ROOM = "Leg Room"
    FUNCTIONAL_ROOM = "Functional Room"


class MuscleGroup(str, Enum):
    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    FOREARMS = "forearms"
    CORE = "core"
    QUADRICEPS = "quadriceps"
    HAMSTRINGS = "hamstrings"
    GLUTES = "glutes"
    CALVES = "calves"
    HIP_FLEXORS = "hip-flexors"


class E1RMFormula(str, Enum):
    """Estimated one-rep-max regression."""

    BRZYCKI = "brzycki"  # default, best for 3-8 reps
    EPLEY = "epley"


class MoveDirection(str, Enum):
    UP = "up"
    DOWN = "down"
