from typing import NamedTuple

import numpy as np

from field_solver import RadialField


class IntegrationError(RuntimeError):
    """Raised when a run does not leave the capacitor within ``max_steps``."""


class TrajectorySample(NamedTuple):
    t: float
    x: float      # lateral displacement vy * t
    pos: float
    a: float
    vy: float


class ParticleState:
    def __init__(self, pos, a):
        """
        Transverse state of a single electron inside the capacitor.

        Parameters
        ----------
        pos : float
            Distance from the inner cylinder; zero means the particle hit it.
        a : float
            Acceleration at the current position.
        """
        self.pos = pos
        self.vy = 0.0
        self.t = 0.0
        self.a = a
        self.step_count = 0

    @classmethod
    def start(cls, params, field, voltage):
        pos = params.start_position
        return cls(pos, field.acceleration(voltage, pos + params.inner_radius))

    @property
    def lateral_displacement(self):
        return self.vy * self.t

    def inside(self, params):
        """True while the particle is off the electrode and within the capacitor length."""
        return self.pos > 0 and self.t * params.initial_speed <= params.length

    def sample(self):
        return TrajectorySample(self.t, self.lateral_displacement, self.pos, self.a, self.vy)

    def push(self, field, voltage, params):
        """
        Advance the particle by one fixed time-step.

        Constant-acceleration kinematics over the step move the particle
        towards the inner cylinder. Once it reaches the wall the transverse
        velocity is frozen at zero.

        Parameters
        ----------
        field : RadialField
            Field model used to update the acceleration.
        voltage : float
            Potential difference between the cylinders.
        params : CapacitorParameters
            Provides dt, the inner radius and the step cap.
        """
        if self.step_count >= params.max_steps:
            raise IntegrationError(
                f"run did not terminate after {params.max_steps} steps "
                f"(pos={self.pos}, t={self.t})"
            )
        dt = params.dt
        self.pos += -self.vy * dt - self.a * dt**2 / 2
        if self.pos > 0:
            self.vy += self.a * dt
            self.a = field.acceleration(voltage, self.pos + params.inner_radius)
        else:
            # struck the inner cylinder, no field to evaluate inside the electrode
            self.vy = 0.0
        self.t += dt
        self.step_count += 1


class Trajectory:
    """
    Recorded run: parallel arrays indexed by step number.

    Attributes
    ----------
    t, x, pos, a, vy : ndarray
        Elapsed time, lateral displacement, distance from the inner cylinder,
        acceleration and transverse velocity before each step.
    voltage : float
        Potential difference the run was made with.
    """
    def __init__(self, samples, voltage, final_position):
        self.voltage = voltage
        self.final_position = final_position
        columns = np.array(samples, dtype=float).reshape(-1, len(TrajectorySample._fields))
        self.t, self.x, self.pos, self.a, self.vy = columns.T

    def __len__(self):
        return len(self.t)

    @property
    def captured(self):
        return self.final_position <= 0

    def samples(self):
        for row in zip(self.t, self.x, self.pos, self.a, self.vy):
            yield TrajectorySample(*(float(v) for v in row))


def simulate(params, voltage, field=None):
    """
    Run the particle through the capacitor and return its final transverse
    position.

    A result ``<= 0`` means the particle reached the inner cylinder before the
    end of the capacitor; a positive result means it flew through.

    Parameters
    ----------
    params : CapacitorParameters
        Geometry, particle constants and time-step.
    voltage : float
        Potential difference between the cylinders [V].
    field : RadialField, optional
        Pre-built field model for ``params``.

    Returns
    -------
    pos : float
        Final distance from the inner cylinder.
    """
    if field is None:
        field = RadialField(params)
    state = ParticleState.start(params, field, voltage)
    while state.inside(params):
        state.push(field, voltage, params)
    return state.pos


def simulate_trajectory(params, voltage, field=None):
    """
    Same run as :func:`simulate`, recording the state before every step.

    Parameters
    ----------
    params : CapacitorParameters
        Geometry, particle constants and time-step.
    voltage : float
        Potential difference between the cylinders [V].
    field : RadialField, optional
        Pre-built field model for ``params``.

    Returns
    -------
    Trajectory
        Recorded samples in time order.
    """
    if field is None:
        field = RadialField(params)
    state = ParticleState.start(params, field, voltage)
    samples = []
    while state.inside(params):
        samples.append(state.sample())
        state.push(field, voltage, params)
    return Trajectory(samples, voltage, state.pos)
