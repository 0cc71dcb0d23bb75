import matplotlib
matplotlib.use('Agg')

import pytest

from capacitor import CapacitorParameters


@pytest.fixture
def scenario():
    """r1 = 1 cm, r2 = 2 cm, v0 = 1e6 m/s, L = 10 cm."""
    return CapacitorParameters.from_geometry(0.01, 0.02, 1e6, 0.1)
