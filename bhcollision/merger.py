"""Merger detection, remnant properties and ringdown waveform.

Fitting formulas for non-precessing binaries:

* final mass: Healy et al. (2014), PRD 90, 104004
* final spin: Rezzolla et al. (2008), PRD 78, 044002
* QNM frequencies: Berti, Cardoso & Starinets (2009), PRD 79, 064016
* recoil kick: Gonzalez et al. (2007), PRL 98, 091101
"""
from dataclasses import dataclass

import numpy as np

from . import constants as C
from .analysis import GWStrain, polarizations
from .physics import Body, center_of_mass


@dataclass(frozen=True)
class RemnantProperties:
    mass: float
    spin: float
    position: np.ndarray
    # centre-of-mass velocity plus the recoil kick
    velocity: np.ndarray
    kick_velocity: float
    kick_direction: np.ndarray
    energy_radiated: float


@dataclass(frozen=True)
class QNMParameters:
    """Fundamental (l=2, m=2, n=0) quasinormal mode of the remnant."""

    angular_frequency: float
    damping_time: float
    amplitude: float
    phase: float
    quality_factor: float

    @property
    def frequency(self):
        return self.angular_frequency / (2.0 * np.pi)


def should_merge(body1, body2, critical_factor=C.DEFAULT_CRITICAL_FACTOR):
    """Return True once the pair has to be handed over to the merger model.

    Triggers when the separation drops below ``critical_factor`` times the
    mean Schwarzschild radius, or when the relative speed exceeds
    :data:`~bhcollision.constants.PN_BREAKDOWN_SPEED`.  The speed guard is a
    numerical safety net for the PN expansion, not a physical criterion.
    """
    separation = np.linalg.norm(body1.pos - body2.pos)
    r_critical = critical_factor * (body1.schwarzschild_radius + body2.schwarzschild_radius) / 2.0
    speed = np.linalg.norm(body1.vel - body2.vel)
    return bool(separation <= r_critical or speed > C.PN_BREAKDOWN_SPEED)


def final_mass_fraction(eta, chi1=0.0, chi2=0.0):
    """Remnant mass as a fraction of the initial total mass."""
    chi_eff = 0.5 * (chi1 + chi2)

    # equal-mass, non-spinning calibration point
    if abs(eta - C.EQUAL_MASS_ETA) < C.EQUAL_MASS_TOLERANCE and abs(chi_eff) < C.EQUAL_MASS_TOLERANCE:
        return C.EQUAL_MASS_FINAL_MASS_FRACTION

    p0 = 0.04827
    p1 = 0.01707
    p2 = -0.0308

    e_rad = eta * (p0 + 4.0 * eta * p0)
    e_rad *= 1.0 + p1 * chi_eff / (1.0 + p2 * chi_eff * chi_eff)
    e_rad = min(max(e_rad, 0.0), C.MAX_RADIATED_FRACTION)
    return 1.0 - e_rad


def final_spin(eta, chi1=0.0, chi2=0.0):
    """Dimensionless remnant spin for aligned spins."""
    s4 = -0.1229
    s5 = 0.4537
    t0 = -2.8904
    t2 = -3.5171
    t3 = 2.5763

    delta_m = np.sqrt(max(0.0, 1.0 - 4.0 * eta))
    a_init = 0.5 * ((1.0 + delta_m) * chi1 + (1.0 - delta_m) * chi2)

    l_orb = 2.0 * np.sqrt(3.0) * eta + t2 * eta ** 2 + t3 * eta ** 3
    a_spin = (
        a_init
        + s4 * a_init * a_init * eta
        + s5 * a_init * eta * delta_m
        + t0 * eta * a_init
    )
    return float(min(max(a_spin + l_orb, 0.0), C.MAX_REMNANT_SPIN))


def recoil_kick(eta, chi1=0.0, chi2=0.0):
    """Recoil speed of the remnant as a fraction of c."""
    a = 1.2e4  # km/s
    b = -0.93

    delta = np.sqrt(max(0.0, 1.0 - 4.0 * eta))
    v_mass = a * eta * eta * delta * (1.0 + b * eta)
    v_spin = 3678.0 * eta * (chi1 - chi2)  # km/s

    return float(np.hypot(v_mass, v_spin) / C.C_KM_S)


def compute_remnant(body1, body2):
    """Remnant properties of the pair at the moment of merger."""
    total_mass = body1.mass + body2.mass
    eta = body1.mass * body2.mass / (total_mass * total_mass)
    chi1, chi2 = body1.spin_parameter, body2.spin_parameter

    mass = total_mass * final_mass_fraction(eta, chi1, chi2)
    kick = recoil_kick(eta, chi1, chi2)
    com_pos, com_vel = center_of_mass(body1, body2)

    # kick along the orbital angular momentum
    l_vec = np.cross(body1.pos - body2.pos, body1.vel - body2.vel)
    l_norm = np.linalg.norm(l_vec)
    if l_norm < C.SEPARATION_EPSILON:
        direction = np.zeros(3)
    else:
        direction = l_vec / l_norm

    return RemnantProperties(
        mass=mass,
        spin=final_spin(eta, chi1, chi2),
        position=com_pos,
        velocity=com_vel + kick * direction,
        kick_velocity=kick,
        kick_direction=direction,
        energy_radiated=1.0 - mass / total_mass,
    )


def compute_qnm_222(remnant_mass, remnant_spin, merger_amplitude):
    """Ringdown parameters of the fundamental mode.

    ``merger_amplitude`` is the strain amplitude at merger multiplied by the
    observer distance.
    """
    f1, f2, f3 = 1.5251, -1.1568, 0.1292
    q1, q2, q3 = 0.7000, 1.4187, -0.4990

    one_minus_af = max(1.0 - remnant_spin, C.ONE_MINUS_SPIN_FLOOR)

    omega = (f1 + f2 * one_minus_af ** f3) / remnant_mass
    quality = q1 + q2 * one_minus_af ** q3

    return QNMParameters(
        angular_frequency=omega,
        damping_time=quality / omega,
        amplitude=merger_amplitude * C.RINGDOWN_AMPLITUDE_CALIBRATION,
        phase=0.0,
        quality_factor=quality,
    )


def ringdown_strain(qnm, t_after_merger, observer_distance, observer_inclination):
    """Damped-sinusoid strain ``t_after_merger`` after the merger.

    Negative times give zero strain.
    """
    if t_after_merger < 0 or observer_distance < C.SEPARATION_EPSILON:
        return GWStrain.zero()

    envelope = qnm.amplitude * np.exp(-t_after_merger / qnm.damping_time)
    phase = qnm.angular_frequency * t_after_merger + qnm.phase

    h_plus, h_cross = polarizations(envelope / observer_distance, phase, observer_inclination)
    return GWStrain(
        h_plus=h_plus,
        h_cross=h_cross,
        amplitude=float(np.hypot(h_plus, h_cross)),
        frequency=qnm.frequency,
    )


def remnant_body(remnant, t_after_merger):
    """The remnant as a :class:`Body`, drifted by its post-merger velocity."""
    return Body(
        remnant.mass,
        remnant.position + remnant.velocity * t_after_merger,
        remnant.velocity,
        spin_parameter=remnant.spin,
        spin_axis=C.REMNANT_SPIN_AXIS,
    )
