import numpy as np

from bhcollision.jit import (
    first_pn_coefficients,
    newtonian_coefficients,
    radiation_reaction_coefficients,
    second_pn_coefficients,
)
from bhcollision.post_newtonian import compute_relative_acceleration


def _reference_relative_acceleration(r_vec, v_vec, m1, m2):
    """Straight NumPy transcription of the 2.5PN relative acceleration."""
    m = m1 + m2
    eta = m1 * m2 / m ** 2
    r = np.linalg.norm(r_vec)
    n = r_vec / r
    v2 = np.dot(v_vec, v_vec)
    rdot = np.dot(n, v_vec)
    mr = m / r

    a_n = -m / r ** 2 * n
    a_1 = -m / r ** 2 * (
        (-v2 + 2 * (2 + eta) * mr + 1.5 * eta * rdot ** 2) * n
        + 2 * (2 - eta) * rdot * v_vec
    )
    a_2 = -m / r ** 2 * (
        (
            -2 * (2 + 25 * eta + 2 * eta ** 2) * mr ** 2
            + 1.5 * eta * (3 - 4 * eta) * v2 ** 2
            + 0.5 * eta * (13 - 4 * eta) * mr * v2
            - (2 + 15 * eta - 2 * eta ** 2) * mr * rdot ** 2
            - 15 / 8 * eta * (1 - 3 * eta) * rdot ** 4
            + 1.5 * eta * (3 - 4 * eta) * v2 * rdot ** 2
        ) * n
        + (
            -0.5 * eta * (15 + 4 * eta) * v2 * rdot
            + (4 + 41 * eta / 4 + eta ** 2) * mr * rdot
            + 1.5 * eta * (3 + 2 * eta) * rdot ** 3
        ) * v_vec
    )
    a_25 = 8 / 5 * eta * m ** 2 / r ** 3 * (
        rdot * (18 * v2 + 2 / 3 * mr - 25 * rdot ** 2) * n
        - (6 * v2 - 2 * mr - 15 * rdot ** 2) * v_vec
    )
    return a_n + a_1 + a_2 + a_25


def test_compiled_kernels_match_numpy_reference():
    r_vec = np.array([6.0, 0.5, -2.0])
    v_vec = np.array([0.05, 0.01, 0.35])
    for m1, m2 in [(0.5, 0.5), (0.8, 0.2), (0.65, 0.35)]:
        acc = compute_relative_acceleration(r_vec, v_vec, m1, m2)
        expected = _reference_relative_acceleration(r_vec, v_vec, m1, m2)
        assert np.allclose(acc.total(), expected, rtol=1e-10, atol=0.0)


def test_kernels_return_coefficient_pairs():
    args = (0.25, 1.0, 10.0, 0.1, 0.0)
    for kernel in (
        newtonian_coefficients,
        first_pn_coefficients,
        second_pn_coefficients,
        radiation_reaction_coefficients,
    ):
        c_n, c_v = kernel(*args)
        assert np.isfinite(c_n)
        assert np.isfinite(c_v)
    assert newtonian_coefficients(*args) == (-0.01, 0.0)
