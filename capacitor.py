import math
from dataclasses import dataclass, asdict

import params


@dataclass(frozen=True)
class CapacitorParameters:
    """
    Immutable description of a coaxial cylindrical capacitor and the electron
    injected into it.

    Attributes
    ----------
    charge : float
        Magnitude of the particle charge [C].
    mass : float
        Particle mass [kg].
    initial_speed : float
        Longitudinal speed at the entrance [m/s].
    length : float
        Capacitor length along the axis [m].
    inner_radius, outer_radius : float
        Radii of the inner and outer cylinders [m].
    start_position : float
        Initial transverse distance from the inner cylinder [m].
    dt : float
        Fixed time-step [s].
    max_steps : int
        Upper bound on the number of steps of a single run.
    """
    charge: float
    mass: float
    initial_speed: float
    length: float
    inner_radius: float
    outer_radius: float
    start_position: float
    dt: float
    max_steps: int = params.max_steps

    def __post_init__(self):
        if self.inner_radius <= 0:
            raise ValueError(f"inner radius must be positive, got {self.inner_radius}")
        if self.outer_radius <= self.inner_radius:
            raise ValueError(
                f"outer radius ({self.outer_radius}) must exceed inner radius ({self.inner_radius})"
            )
        if self.initial_speed <= 0:
            raise ValueError(f"initial speed must be positive, got {self.initial_speed}")
        if self.length <= 0:
            raise ValueError(f"capacitor length must be positive, got {self.length}")
        if self.dt <= 0:
            raise ValueError(f"time-step must be positive, got {self.dt}")
        if self.charge <= 0 or self.mass <= 0:
            raise ValueError("charge magnitude and mass must be positive")
        if not 0 < self.start_position <= self.gap / 2:
            raise ValueError(
                f"start position {self.start_position} outside (0, {self.gap / 2}]"
            )
        if self.max_steps <= 0:
            raise ValueError(f"max_steps must be positive, got {self.max_steps}")

    @classmethod
    def from_geometry(cls, inner_radius, outer_radius, initial_speed, length,
                      charge=params.e_charge, mass=params.e_mass,
                      start_position=None, steps_per_transit=params.steps_per_transit,
                      dt=None, max_steps=params.max_steps):
        """
        Build parameters from the four measured inputs.

        The particle starts at mid-gap unless ``start_position`` is given, and
        the time-step defaults to ``length / (initial_speed * steps_per_transit)``.

        Parameters
        ----------
        inner_radius, outer_radius : float
            Cylinder radii [m].
        initial_speed : float
            Longitudinal entrance speed [m/s].
        length : float
            Capacitor length [m].
        steps_per_transit : int, optional
            Number of steps across the nominal transit time (default: 1000).
        dt : float, optional
            Explicit time-step; overrides ``steps_per_transit``.

        Returns
        -------
        CapacitorParameters
        """
        if start_position is None:
            start_position = (outer_radius - inner_radius) / 2
        if dt is None:
            if initial_speed <= 0:
                raise ValueError(f"initial speed must be positive, got {initial_speed}")
            if steps_per_transit <= 0:
                raise ValueError(f"steps_per_transit must be positive, got {steps_per_transit}")
            dt = length / (initial_speed * steps_per_transit)
        return cls(charge=charge, mass=mass, initial_speed=initial_speed,
                   length=length, inner_radius=inner_radius,
                   outer_radius=outer_radius, start_position=start_position,
                   dt=dt, max_steps=max_steps)

    @property
    def gap(self):
        return self.outer_radius - self.inner_radius

    @property
    def transit_time(self):
        return self.length / self.initial_speed

    @property
    def log_ratio(self):
        # ln(R2/R1) from the coaxial capacitance
        return math.log(self.outer_radius / self.inner_radius)

    def as_dict(self):
        return asdict(self)
