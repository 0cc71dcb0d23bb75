import math

import numpy as np
import pytest

from field_solver import RadialField


def test_acceleration_formula(scenario):
    field = RadialField(scenario)
    expected = 1.6e-19 * 2.0 / (9.1e-31 * 0.015 * math.log(2.0))
    assert field.acceleration(2.0, 0.015) == pytest.approx(expected, rel=1e-12)


def test_zero_voltage_gives_zero_acceleration(scenario):
    assert RadialField(scenario).acceleration(0.0, 0.015) == 0.0


@pytest.mark.parametrize("r", [0.0, -0.01])
def test_non_positive_radius_is_rejected(scenario, r):
    field = RadialField(scenario)
    with pytest.raises(ValueError):
        field.acceleration(1.0, r)
    with pytest.raises(ValueError):
        field.field_strength(1.0, r)


def test_decreasing_in_radius(scenario):
    field = RadialField(scenario)
    r = np.linspace(0.01, 0.02, 50)
    a = field.acceleration(5.0, r)
    assert np.all(np.diff(a) < 0)


def test_increasing_in_voltage(scenario):
    field = RadialField(scenario)
    a = [field.acceleration(u, 0.015) for u in (0.1, 1.0, 10.0, 100.0)]
    assert all(a0 < a1 for a0, a1 in zip(a, a[1:]))


def test_array_with_non_positive_entry_is_rejected(scenario):
    with pytest.raises(ValueError):
        RadialField(scenario).acceleration(1.0, np.array([0.01, 0.0]))


def test_field_strength_relates_to_acceleration(scenario):
    field = RadialField(scenario)
    E = field.field_strength(3.0, 0.012)
    a = field.acceleration(3.0, 0.012)
    assert a == pytest.approx(E * scenario.charge / scenario.mass)
