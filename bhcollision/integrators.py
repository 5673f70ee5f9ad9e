import numpy as np

from . import constants as C
from .post_newtonian import compute_relative_acceleration, split_relative_acceleration


class IntegratorState:
    """Positions and velocities of both bodies plus the elapsed time.

    ``positions`` and ``velocities`` are ``(2, 3)`` arrays, row 0 holding
    body 1 and row 1 body 2.
    """

    __slots__ = ("positions", "velocities", "time")

    def __init__(self, positions, velocities, time=0.0):
        self.positions = np.array(positions, dtype=float).reshape(2, 3)
        self.velocities = np.array(velocities, dtype=float).reshape(2, 3)
        self.time = float(time)

    @classmethod
    def from_bodies(cls, body1, body2, time=0.0):
        return cls([body1.pos, body2.pos], [body1.vel, body2.vel], time)

    @property
    def pos1(self):
        return self.positions[0]

    @property
    def vel1(self):
        return self.velocities[0]

    @property
    def pos2(self):
        return self.positions[1]

    @property
    def vel2(self):
        return self.velocities[1]

    @property
    def separation(self):
        return float(np.linalg.norm(self.positions[0] - self.positions[1]))

    def copy(self):
        return IntegratorState(self.positions, self.velocities, self.time)

    def __repr__(self):
        return (
            f"IntegratorState(time={self.time}, positions={self.positions.tolist()}, "
            f"velocities={self.velocities.tolist()})"
        )


class StateDerivative:
    """Time derivative of an :class:`IntegratorState`."""

    __slots__ = ("dpositions", "dvelocities")

    def __init__(self, dpositions, dvelocities):
        self.dpositions = np.asarray(dpositions, dtype=float)
        self.dvelocities = np.asarray(dvelocities, dtype=float)


def state_add(state, derivative, dt):
    """Return ``state + dt * derivative`` with the clock advanced by ``dt``."""
    return IntegratorState(
        state.positions + dt * derivative.dpositions,
        state.velocities + dt * derivative.dvelocities,
        state.time + dt,
    )


def make_derivative(m1, m2, enable_1pn=True, enable_2pn=True, enable_25pn=True):
    """Build the PN derivative function ``state -> StateDerivative``."""

    def deriv(state):
        acc = compute_relative_acceleration(
            state.pos1 - state.pos2,
            state.vel1 - state.vel2,
            m1,
            m2,
            enable_1pn,
            enable_2pn,
            enable_25pn,
        )
        a1, a2 = split_relative_acceleration(acc.total(), m1, m2)
        return StateDerivative(state.velocities.copy(), np.array([a1, a2]))

    return deriv


def rk4_step(state, dt, derivative):
    """Advance ``state`` by one classic fourth-order Runge-Kutta step.

    The input state is left untouched; a new state is returned.
    """
    k1 = derivative(state)
    k2 = derivative(state_add(state, k1, 0.5 * dt))
    k3 = derivative(state_add(state, k2, 0.5 * dt))
    k4 = derivative(state_add(state, k3, dt))

    pos_new = state.positions + (dt / 6.0) * (
        k1.dpositions + 2 * k2.dpositions + 2 * k3.dpositions + k4.dpositions
    )
    vel_new = state.velocities + (dt / 6.0) * (
        k1.dvelocities + 2 * k2.dvelocities + 2 * k3.dvelocities + k4.dvelocities
    )
    return IntegratorState(pos_new, vel_new, state.time + dt)


def orbital_period(separation, total_mass):
    """Keplerian period ``2 pi sqrt(r^3 / M)``."""
    return 2.0 * np.pi * np.sqrt(separation ** 3 / total_mass)


def adaptive_timestep(state, config, total_mass):
    """Time step sized as a fraction of the local orbital period.

    Inside twice the ISCO radius of the total mass the step is shrunk further
    by ``(r / (2 r_isco))**2``.  The result is always clamped to
    ``[config.dt_min, config.dt_max]``.
    """
    if not config.adaptive:
        return config.dt_initial

    separation = state.separation
    if separation < C.SEPARATION_EPSILON:
        return config.dt_min

    dt = config.safety_factor * orbital_period(separation, total_mass)

    r_isco = 6.0 * total_mass
    if separation < 2.0 * r_isco:
        scale = separation / (2.0 * r_isco)
        dt *= scale * scale

    return float(min(max(dt, config.dt_min), config.dt_max))
