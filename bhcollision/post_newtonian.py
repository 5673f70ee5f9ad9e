"""Post-Newtonian equations of motion for a binary.

The relative acceleration of ``r = x1 - x2`` is assembled from a list of
independent terms (Newtonian, 1PN, 2PN and the 2.5PN radiation reaction).
Each term contributes ``c_n * n + c_v * v``; the scalar coefficients come from
the compiled kernels in :mod:`bhcollision.jit`.  Callers choose which terms
take part, e.g. a pure Newtonian run for conservation checks.
"""
from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional

import numpy as np

from . import constants as C
from .jit import (
    first_pn_coefficients,
    newtonian_coefficients,
    radiation_reaction_coefficients,
    second_pn_coefficients,
)


class PNTerm(NamedTuple):
    name: str
    # name of the enable flag, ``None`` for terms that are always on
    flag: Optional[str]
    kernel: Callable


PN_TERMS = (
    PNTerm("newtonian", None, newtonian_coefficients),
    PNTerm("first_pn", "enable_1pn", first_pn_coefficients),
    PNTerm("second_pn", "enable_2pn", second_pn_coefficients),
    PNTerm("radiation_reaction", "enable_25pn", radiation_reaction_coefficients),
)


def active_terms(enable_1pn=True, enable_2pn=True, enable_25pn=True):
    """Return the subset of :data:`PN_TERMS` switched on by the flags."""
    flags = {
        "enable_1pn": enable_1pn,
        "enable_2pn": enable_2pn,
        "enable_25pn": enable_25pn,
    }
    return tuple(t for t in PN_TERMS if t.flag is None or flags[t.flag])


@dataclass(frozen=True)
class AccelerationTerms:
    """Separately labelled acceleration contributions."""

    newtonian: np.ndarray
    first_pn: np.ndarray
    second_pn: np.ndarray
    radiation_reaction: np.ndarray

    @classmethod
    def zeros(cls):
        return cls(np.zeros(3), np.zeros(3), np.zeros(3), np.zeros(3))

    def total(self):
        return self.newtonian + self.first_pn + self.second_pn + self.radiation_reaction

    def scaled(self, factor):
        return AccelerationTerms(
            factor * self.newtonian,
            factor * self.first_pn,
            factor * self.second_pn,
            factor * self.radiation_reaction,
        )


def evaluate_terms(rel_pos, rel_vel, m1, m2, terms):
    """Evaluate ``terms`` for the relative orbit and return them by name.

    Terms not listed are reported as zero vectors.
    """
    r = np.asarray(rel_pos, dtype=float)
    v = np.asarray(rel_vel, dtype=float)
    contributions = {t.name: np.zeros(3) for t in PN_TERMS}

    r_mag = float(np.sqrt(np.dot(r, r)))
    if r_mag < C.SEPARATION_EPSILON:
        return contributions

    m = m1 + m2
    eta = m1 * m2 / (m * m)
    n = r / r_mag
    v2 = float(np.dot(v, v))
    rdot = float(np.dot(n, v))

    for term in terms:
        c_n, c_v = term.kernel(eta, m, r_mag, v2, rdot)
        contributions[term.name] = c_n * n + c_v * v
    return contributions


def compute_relative_acceleration(
    rel_pos,
    rel_vel,
    m1,
    m2,
    enable_1pn=True,
    enable_2pn=True,
    enable_25pn=True,
):
    """PN acceleration of the relative coordinate ``r = x1 - x2``.

    Parameters
    ----------
    rel_pos, rel_vel : array-like
        Relative position and velocity.
    m1, m2 : float
        Component masses.
    enable_1pn, enable_2pn, enable_25pn : bool, optional
        Switch the corresponding correction on or off.  The Newtonian term
        is always included.

    Returns
    -------
    AccelerationTerms
        All terms are zero when the separation is below ``1e-10``.
    """
    contributions = evaluate_terms(
        rel_pos, rel_vel, m1, m2, active_terms(enable_1pn, enable_2pn, enable_25pn)
    )
    return AccelerationTerms(**contributions)


def compute_acceleration(body1, body2, enable_1pn=True, enable_2pn=True, enable_25pn=True):
    """Acceleration terms acting on ``body1`` due to ``body2``."""
    rel = compute_relative_acceleration(
        body1.pos - body2.pos,
        body1.vel - body2.vel,
        body1.mass,
        body2.mass,
        enable_1pn,
        enable_2pn,
        enable_25pn,
    )
    return rel.scaled(body2.mass / (body1.mass + body2.mass))


def split_relative_acceleration(a_rel, m1, m2):
    """Distribute a relative acceleration onto the two bodies.

    ``a1 = (m2/M) a_rel`` and ``a2 = -(m1/M) a_rel`` so that
    ``m1 a1 + m2 a2 = 0``.
    """
    m = m1 + m2
    return (m2 / m) * a_rel, -(m1 / m) * a_rel


def body_accelerations(body1, body2, enable_1pn=True, enable_2pn=True, enable_25pn=True):
    """Total accelerations of both bodies in the centre-of-mass frame."""
    rel = compute_relative_acceleration(
        body1.pos - body2.pos,
        body1.vel - body2.vel,
        body1.mass,
        body2.mass,
        enable_1pn,
        enable_2pn,
        enable_25pn,
    )
    return split_relative_acceleration(rel.total(), body1.mass, body2.mass)
