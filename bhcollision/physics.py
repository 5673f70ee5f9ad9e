"""Black hole state used throughout the simulation.

This module defines a lightweight :class:`Body` class holding the intrinsic
properties (mass, spin) and the kinematic state of one black hole.  All
quantities are geometrized (G = c = 1) with the total system mass as unit.
"""
import numpy as np

from . import constants as C


def _as_vector(values):
    v = np.asarray(values, dtype=float).reshape(-1)
    if v.size < 3:
        v = np.pad(v, (0, 3 - v.size))
    return v[:3].copy()


def _unit_axis(axis):
    a = _as_vector(axis)
    norm = np.linalg.norm(a)
    if norm < C.SEPARATION_EPSILON or not np.isfinite(norm):
        return C.DEFAULT_SPIN_AXIS.copy()
    return a / norm


class Body:
    """One black hole of a binary."""

    def __init__(self, mass, pos, vel, spin_parameter=0.0, spin_axis=C.DEFAULT_SPIN_AXIS):
        """Create a body storing position and velocity as 3-D vectors.

        Parameters
        ----------
        mass : float
            Mass in units of the total system mass.
        pos : array-like
            Position in units of M. Values with fewer than three components
            are padded with zeros.
        vel : array-like
            Velocity as a fraction of the speed of light.
        spin_parameter : float, optional
            Dimensionless spin ``chi`` in [0, 1).
        spin_axis : array-like, optional
            Spin direction. Stored normalized; a zero vector falls back to
            the y axis.
        """
        self.mass = float(mass)
        self.pos = _as_vector(pos)
        self.vel = _as_vector(vel)
        self.spin_parameter = float(spin_parameter)
        self.spin_axis = _unit_axis(spin_axis)

    @property
    def schwarzschild_radius(self):
        """``r_s = 2m``."""
        return 2.0 * self.mass

    @property
    def gravitational_radius(self):
        return self.mass

    @property
    def isco_radius(self):
        """Prograde ISCO radius (Bardeen, Press & Teukolsky 1972)."""
        a = self.spin_parameter
        if a < C.SPIN_EPSILON:
            return 6.0 * self.mass
        z1 = 1.0 + np.cbrt(1.0 - a * a) * (np.cbrt(1.0 + a) + np.cbrt(1.0 - a))
        z2 = np.sqrt(3.0 * a * a + z1 * z1)
        return float(self.mass * (3.0 + z2 - np.sqrt((3.0 - z1) * (3.0 + z1 + 2.0 * z2))))

    def with_state(self, pos, vel):
        """Return a new body with the same mass and spin at ``pos``/``vel``."""
        return Body(self.mass, pos, vel, self.spin_parameter, self.spin_axis)

    def copy(self):
        return self.with_state(self.pos, self.vel)

    def __repr__(self):
        return (
            f"Body(mass={self.mass}, pos={self.pos.tolist()}, "
            f"vel={self.vel.tolist()}, spin_parameter={self.spin_parameter})"
        )


def center_of_mass(body1, body2):
    """Return the centre-of-mass position and velocity of a pair."""
    total_mass = body1.mass + body2.mass
    com_pos = (body1.mass * body1.pos + body2.mass * body2.pos) / total_mass
    com_vel = (body1.mass * body1.vel + body2.mass * body2.vel) / total_mass
    return com_pos, com_vel


def total_momentum(bodies):
    p = np.zeros(3, dtype=float)
    for b in bodies:
        p += b.mass * b.vel
    return p
