import pytest

from gym_tracker.core.enums import E1RMFormula
from gym_tracker.services.e1rm import (
    calculate_brzycki,
    calculate_e1rm,
    calculate_epley,
    get_best_e1rm,
    round_half_up,
)
from conftest import make_set


@pytest.mark.parametrize("weight", [20.0, 100.0, 225.0])
@pytest.mark.parametrize("reps", [1, 37, 40])
def test_brzycki_is_identity_outside_its_range(weight, reps):
    assert calculate_brzycki(weight, reps) == weight


@pytest.mark.parametrize("weight", [0.0, 60.0, 225.0])
def test_epley_single_rep_is_identity(weight):
    assert calculate_epley(weight, 1) == weight


def test_reference_values_for_225_by_5():
    assert calculate_brzycki(225, 5) == pytest.approx(253.125, abs=0.01)
    assert calculate_epley(225, 5) == pytest.approx(262.5, abs=0.01)


@pytest.mark.parametrize("weight,reps", [(0, 5), (100, 0), (0, 0)])
def test_zero_weight_or_reps_gives_zero(weight, reps):
    assert calculate_e1rm(weight, reps) == 0
    assert calculate_e1rm(weight, reps, "epley") == 0


def test_calculate_e1rm_rounds_to_one_decimal():
    assert calculate_e1rm(225, 5) == 253.1
    assert calculate_e1rm(225, 5, E1RMFormula.EPLEY) == 262.5
    assert calculate_e1rm(100, 1) == 100.0


def test_calculate_e1rm_rejects_unknown_formula():
    with pytest.raises(ValueError):
        calculate_e1rm(100, 5, "lombardi")


def test_round_half_up_differs_from_bankers_rounding():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.25, 1) == 0.3
    assert round_half_up(45.6) == 46


def test_best_e1rm_takes_the_peak_set():
    sets = [make_set(60, 10), make_set(100, 5), make_set(110, 1)]
    assert get_best_e1rm(sets) == calculate_e1rm(100, 5)


def test_best_e1rm_accepts_mappings_and_empty_input():
    assert get_best_e1rm([{"weight": 100, "reps": 5}]) == 112.5
    assert get_best_e1rm([]) == 0
