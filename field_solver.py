import numpy as np

# Field solvers

class RadialField:
    """
    Radial electric field between two coaxial cylinders held at a potential
    difference U.

    E(r) = U / (r ln(R2/R1)), so the particle acceleration is
    a(r) = q U / (m r ln(R2/R1)).

    Parameters
    ----------
    params : CapacitorParameters
        Geometry and particle constants.
    """
    def __init__(self, params):
        self.params = params
        self.log_ratio = params.log_ratio

    def _check_radius(self, r):
        if np.any(np.asarray(r) <= 0):
            raise ValueError(f"radial distance must be positive, got {r}")

    def field_strength(self, voltage, r):
        """
        Radial electric field magnitude at distance r from the axis.

        Parameters
        ----------
        voltage : float
            Potential difference between the cylinders [V].
        r : float or ndarray
            Distance from the axis [m], strictly positive.

        Returns
        -------
        E : float or ndarray
            Field magnitude [V/m].
        """
        self._check_radius(r)
        return voltage / (r * self.log_ratio)

    def acceleration(self, voltage, r):
        """
        Transverse acceleration of the particle at distance r from the axis.

        Parameters
        ----------
        voltage : float
            Potential difference between the cylinders [V].
        r : float or ndarray
            Distance from the axis [m], strictly positive.

        Returns
        -------
        a : float or ndarray
            Acceleration directed towards the inner cylinder [m/s^2].
        """
        self._check_radius(r)
        return (self.params.charge * voltage) / (self.params.mass * r * self.log_ratio)
