import numpy as np
import pytest

from particles import simulate
from search import (
    BracketError, bisection_steps, check_bracket, expand_bracket,
    find_minimum_voltage, scan_voltages,
)


@pytest.fixture
def U_min(scenario):
    return find_minimum_voltage(scenario)


def test_critical_voltage_in_expected_range(U_min):
    assert np.isfinite(U_min)
    assert 0.0 < U_min < 1000.0
    # constant-acceleration estimates bound it between ~0.039 V and ~0.059 V
    assert 0.035 < U_min < 0.065


def test_critical_voltage_separates_outcomes(scenario, U_min):
    assert simulate(scenario, U_min) <= 0
    assert simulate(scenario, U_min - 1e-4) > 0
    assert simulate(scenario, U_min + 1e-4) <= 0


def test_tolerance_controls_precision(scenario, U_min):
    coarse = find_minimum_voltage(scenario, tol=1e-2)
    assert coarse >= U_min - 1e-5
    assert coarse - U_min <= 1e-2 + 1e-5


def test_search_is_deterministic(scenario, U_min):
    assert find_minimum_voltage(scenario) == U_min


def test_bisection_steps():
    assert bisection_steps(0.0, 1000.0, 1e-5) == 27
    assert bisection_steps(0.0, 1.0, 2.0) == 0


def test_bracket_too_low_is_rejected(scenario):
    with pytest.raises(BracketError):
        find_minimum_voltage(scenario, high=0.01)


def test_lower_bracket_already_capturing(scenario):
    with pytest.raises(BracketError):
        check_bracket(scenario, 1.0, 1000.0)


def test_unchecked_search_returns_upper_bracket(scenario):
    # without the check, a bracket entirely on the fly-through side collapses onto high
    assert find_minimum_voltage(scenario, high=0.01, check=False) == 0.01


def test_expansion_recovers_small_bracket(scenario, U_min):
    U = find_minimum_voltage(scenario, high=1e-3, expand=True)
    assert U == pytest.approx(U_min, abs=2e-5)


def test_expand_bracket_doubles_until_capture(scenario):
    high = expand_bracket(scenario, 1e-3)
    assert simulate(scenario, high) <= 0
    assert simulate(scenario, high / 2) > 0


def test_expand_bracket_gives_up(scenario):
    with pytest.raises(BracketError):
        expand_bracket(scenario, 1e-6, max_expansions=3)
    with pytest.raises(ValueError):
        expand_bracket(scenario, 0.0)


@pytest.mark.parametrize("kwargs", [
    dict(low=-1.0),
    dict(low=5.0, high=5.0),
    dict(tol=0.0),
])
def test_invalid_search_arguments(scenario, kwargs):
    with pytest.raises(ValueError):
        find_minimum_voltage(scenario, **kwargs)


def test_scan_voltages(scenario, U_min):
    voltages = np.linspace(0.0, 2 * U_min, 9)
    final_pos = scan_voltages(scenario, voltages)
    assert final_pos.shape == voltages.shape
    assert final_pos[0] == scenario.start_position
    assert final_pos[-1] <= 0
    passes = final_pos > 0
    # once captured, stays captured
    assert np.all(np.diff(passes.astype(int)) <= 0)
    assert np.all(np.diff(final_pos[passes]) < 0)
