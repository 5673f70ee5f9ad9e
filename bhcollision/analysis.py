"""Orbital parameters and gravitational-wave strain of a binary.

References: Peters & Mathews, Phys. Rev. 131 (1963) 435; Maggiore,
"Gravitational Waves" (Oxford, 2007).
"""
import csv
import os
from collections import deque
from dataclasses import dataclass

import numpy as np

from . import constants as C


@dataclass(frozen=True)
class OrbitalParameters:
    separation: float = 0.0
    orbital_frequency: float = 0.0
    orbital_phase: float = 0.0
    radial_velocity: float = 0.0
    velocity_param: float = 0.0
    reduced_mass: float = 0.0
    total_mass: float = 0.0
    symmetric_mass_ratio: float = 0.0
    chirp_mass: float = 0.0
    energy: float = 0.0
    angular_momentum: float = 0.0


@dataclass(frozen=True)
class GWStrain:
    h_plus: float = 0.0
    h_cross: float = 0.0
    amplitude: float = 0.0
    # instantaneous GW frequency, twice the orbital frequency
    frequency: float = 0.0

    @classmethod
    def zero(cls):
        return cls()


def wrap_phase(phase):
    """Wrap an angle into ``(-pi, pi]``."""
    wrapped = (phase + np.pi) % (2.0 * np.pi) - np.pi
    if wrapped <= -np.pi:
        wrapped += 2.0 * np.pi
    return float(wrapped)


def compute_orbital_params(body1, body2):
    """Derive the orbital parameters of the pair.

    The orbital frequency comes from the angular momentum,
    ``omega = |L| / (mu r^2)``, so it stays meaningful for eccentric and
    PN-perturbed orbits.  The energy is the Newtonian binding energy.
    """
    total_mass = body1.mass + body2.mass
    reduced_mass = body1.mass * body2.mass / total_mass
    eta = reduced_mass / total_mass
    masses = dict(
        reduced_mass=reduced_mass,
        total_mass=total_mass,
        symmetric_mass_ratio=eta,
        chirp_mass=total_mass * eta ** 0.6,
    )

    r = body1.pos - body2.pos
    v = body1.vel - body2.vel
    separation = float(np.linalg.norm(r))
    if separation < C.SEPARATION_EPSILON:
        return OrbitalParameters(separation=separation, **masses)

    n = r / separation
    angular_momentum = float(np.linalg.norm(reduced_mass * np.cross(r, v)))
    omega = angular_momentum / (reduced_mass * separation * separation)
    velocity_param = float(np.cbrt(total_mass * omega)) if omega > 0 else 0.0

    # orbital plane is x-z
    phase = wrap_phase(np.arctan2(r[2], r[0]))

    v2 = float(np.dot(v, v))
    energy = 0.5 * reduced_mass * v2 - reduced_mass * total_mass / separation

    return OrbitalParameters(
        separation=separation,
        orbital_frequency=omega,
        orbital_phase=phase,
        radial_velocity=float(np.dot(v, n)),
        velocity_param=velocity_param,
        energy=energy,
        angular_momentum=angular_momentum,
        **masses,
    )


def polarizations(amplitude, phase, inclination):
    """Split a strain amplitude into ``(h_plus, h_cross)`` for inclination ``iota``."""
    cos_iota = np.cos(inclination)
    h_plus = amplitude * (1.0 + cos_iota * cos_iota) / 2.0 * np.cos(phase)
    h_cross = amplitude * cos_iota * np.sin(phase)
    return float(h_plus), float(h_cross)


def compute_gw_strain(body1, body2, observer_distance, observer_inclination):
    """Leading-order quadrupole strain seen by a distant observer."""
    p = compute_orbital_params(body1, body2)
    if p.separation < C.SEPARATION_EPSILON or observer_distance < C.SEPARATION_EPSILON:
        return GWStrain.zero()

    v_param = np.cbrt(p.total_mass * p.orbital_frequency)
    prefactor = 2.0 * p.reduced_mass * v_param * v_param / observer_distance

    h_plus, h_cross = polarizations(-prefactor, 2.0 * p.orbital_phase, observer_inclination)
    return GWStrain(
        h_plus=h_plus,
        h_cross=h_cross,
        amplitude=float(np.hypot(h_plus, h_cross)),
        frequency=p.orbital_frequency / np.pi,
    )


def energy_loss_rate(eta, total_mass, separation):
    """Peters formula ``dE/dt = -(32/5) eta^2 M^5 / r^5``."""
    if separation < C.SEPARATION_EPSILON:
        return 0.0
    return -(32.0 / 5.0) * eta * eta * total_mass ** 5 / separation ** 5


def angular_momentum_loss_rate(eta, total_mass, separation):
    """``dL/dt = -(32/5) eta^2 M^(9/2) / r^(7/2)``."""
    if separation < C.SEPARATION_EPSILON:
        return 0.0
    return -(32.0 / 5.0) * eta * eta * total_mass ** 4.5 / separation ** 3.5


def kepler_frequency(total_mass, separation):
    """Circular-orbit angular frequency ``sqrt(M / r^3)``."""
    if separation < C.SEPARATION_EPSILON:
        return 0.0
    return float(np.sqrt(total_mass / separation ** 3))


def time_to_merger_estimate(eta, total_mass, separation):
    """Leading-order Peters estimate ``(5/256) r^4 / (eta M^3)``."""
    return (5.0 / 256.0) * separation ** 4 / (eta * total_mass ** 3)


class EnergyMonitor:
    """Track the relative drift of the binding energy of a pair."""

    def __init__(self, max_points=500):
        self.history = deque(maxlen=max_points)
        self.initial_energy = None

    def set_initial_energy(self, body1, body2):
        self.initial_energy = compute_orbital_params(body1, body2).energy
        self.history.clear()

    def update(self, body1, body2):
        if self.initial_energy is None or abs(self.initial_energy) < 1e-12:
            return
        current = compute_orbital_params(body1, body2).energy
        self.history.append((current - self.initial_energy) / abs(self.initial_energy))

    @property
    def max_drift(self):
        return max((abs(d) for d in self.history), default=0.0)

    def export_csv(self, file, delimiter=","):
        """Export the recorded drift history to a CSV file.

        Parameters
        ----------
        file : str or file-like
            Destination filename or open file object.
        delimiter : str, optional
            Delimiter used between columns (default is ',').
        """
        close = False
        if isinstance(file, (str, bytes, os.PathLike)):
            f = open(file, "w", newline="")
            close = True
        else:
            f = file
        try:
            writer = csv.writer(f, delimiter=delimiter)
            writer.writerow(["step", "energy_drift"])
            for i, drift in enumerate(self.history):
                writer.writerow([i, drift])
        finally:
            if close:
                f.close()
