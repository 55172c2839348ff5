"""Estimated one-rep-max (E1RM) formulas.

Both formulas predict the heaviest single from a sub-maximal weight x reps pair.
Outside the range where a formula is meaningful the estimate degrades to the
lifted weight itself instead of raising: logged sets may legitimately be zero
or incomplete.

- Brzycki (1993): weight * 36 / (37 - reps). Best for 3-8 reps; the default.
- Epley (1985): weight * (1 + reps / 30). Best for 2-10 reps.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import Protocol

from gym_tracker.core.constants import BRZYCKI_REP_LIMIT, EPLEY_DIVISOR
from gym_tracker.core.enums import E1RMFormula


class WeightReps(Protocol):
    weight: float
    reps: int


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round like a scale does (x.5 goes up), not banker's rounding."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def calculate_brzycki(weight: float, reps: int) -> float:
    if reps <= 1 or reps >= BRZYCKI_REP_LIMIT:
        return weight
    return weight * (36 / (BRZYCKI_REP_LIMIT - reps))


def calculate_epley(weight: float, reps: int) -> float:
    if reps <= 1:
        return weight
    return weight * (1 + reps / EPLEY_DIVISOR)


_FORMULAS = {
    E1RMFormula.BRZYCKI: calculate_brzycki,
    E1RMFormula.EPLEY: calculate_epley,
}


def calculate_e1rm(weight: float, reps: int, formula: E1RMFormula | str = E1RMFormula.BRZYCKI) -> float:
    """E1RM rounded to one decimal; 0 when there is no weight or no reps."""
    if weight <= 0 or reps <= 0:
        return 0.0
    estimate = _FORMULAS[E1RMFormula(formula)](weight, reps)
    return round_half_up(estimate, 1)


def _weight_reps(s: WeightReps | Mapping) -> tuple[float, int]:
    if isinstance(s, Mapping):
        return s["weight"], s["reps"]
    return s.weight, s.reps


def get_best_e1rm(
    sets: Iterable[WeightReps | Mapping], formula: E1RMFormula | str = E1RMFormula.BRZYCKI
) -> float:
    """Highest E1RM across sets (warm-ups, working sets and heavy singles alike).

    Accepts set records or plain `{"weight": .., "reps": ..}` mappings.
    """
    return max((calculate_e1rm(*_weight_reps(s), formula) for s in sets), default=0.0)
