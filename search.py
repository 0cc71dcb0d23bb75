import math

import numpy as np

import params as defaults
from field_solver import RadialField
from particles import simulate


class BracketError(ValueError):
    """The voltage bracket does not separate fly-through from capture."""


def bisection_steps(low, high, tol):
    """Number of halvings needed to shrink [low, high] below tol."""
    if high - low <= tol:
        return 0
    return math.ceil(math.log2((high - low) / tol))


def expand_bracket(params, high, field=None, max_expansions=defaults.max_expansions):
    """
    Double the upper bracket until the particle is captured.

    Parameters
    ----------
    params : CapacitorParameters
        Simulation parameters.
    high : float
        Starting upper bracket [V], must be positive.
    max_expansions : int, optional
        Maximum number of doublings.

    Returns
    -------
    high : float
        First doubled value with ``simulate(high) <= 0``.
    """
    if high <= 0:
        raise ValueError(f"upper bracket must be positive to expand, got {high}")
    if field is None:
        field = RadialField(params)
    for _ in range(max_expansions):
        if simulate(params, high, field) <= 0:
            return high
        high *= 2
    raise BracketError(
        f"particle still flies through after {max_expansions} bracket doublings (U={high} V)"
    )


def check_bracket(params, low, high, field=None):
    """
    Verify that the particle flies through at ``low`` and is captured at ``high``.

    Raises
    ------
    BracketError
        If either end is on the wrong side.
    """
    if field is None:
        field = RadialField(params)
    pos_low = simulate(params, low, field)
    if pos_low <= 0:
        raise BracketError(
            f"particle is already captured at the lower bracket U={low} V (pos={pos_low})"
        )
    pos_high = simulate(params, high, field)
    if pos_high > 0:
        raise BracketError(
            f"particle still flies through at the upper bracket U={high} V (pos={pos_high}); "
            "raise the bracket or enable expansion"
        )


def find_minimum_voltage(params, low=defaults.U_low, high=defaults.U_high,
                         tol=defaults.U_tol, check=True, expand=False,
                         max_expansions=defaults.max_expansions):
    """
    Bisect for the smallest potential difference at which the particle is
    captured by the inner cylinder instead of leaving the capacitor.

    Assumes the final position decreases monotonically with voltage. Where it
    does not, the result is some zero crossing inside the bracket.

    Parameters
    ----------
    params : CapacitorParameters
        Simulation parameters.
    low, high : float, optional
        Initial bracket [V] (default: 0 and 1000).
    tol : float, optional
        Absolute tolerance on the voltage (default: 1e-5).
    check : bool, optional
        Verify the bracket before bisecting (default: True).
    expand : bool, optional
        Double ``high`` until it captures the particle (default: False).

    Returns
    -------
    high : float
        Upper end of the final bracket, on the capture side.
    """
    if low < 0:
        raise ValueError(f"lower bracket must be non-negative, got {low}")
    if high <= low:
        raise ValueError(f"upper bracket ({high}) must exceed lower bracket ({low})")
    if tol <= 0:
        raise ValueError(f"tolerance must be positive, got {tol}")

    field = RadialField(params)
    if expand:
        high = expand_bracket(params, high, field, max_expansions)
    if check:
        check_bracket(params, low, high, field)

    while high - low > tol:
        mid = (low + high) / 2
        if simulate(params, mid, field) <= 0:
            high = mid
        else:
            low = mid
    return high


def scan_voltages(params, voltages):
    """
    Final transverse position for each voltage in ``voltages``.

    Parameters
    ----------
    params : CapacitorParameters
        Simulation parameters.
    voltages : array_like
        Potential differences [V].

    Returns
    -------
    final_pos : ndarray
        Final position of each run, same shape as ``voltages``.
    """
    field = RadialField(params)
    voltages = np.asarray(voltages, dtype=float)
    return np.array([simulate(params, float(u), field) for u in voltages.ravel()]).reshape(voltages.shape)
