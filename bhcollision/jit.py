"""numba compiled post-Newtonian coefficient kernels.

Each kernel maps the scalar invariants of the relative orbit

* ``eta``  - symmetric mass ratio
* ``m``    - total mass
* ``r``    - separation
* ``v2``   - squared relative speed
* ``rdot`` - radial velocity ``n . v``

to a pair ``(c_n, c_v)`` so that the vector contribution of the term is
``c_n * n + c_v * v``.  Coefficients follow Blanchet, Living Rev.
Relativity 17 (2014) 2, in harmonic coordinates for the relative motion.
"""

import numba as nb


@nb.njit
def newtonian_coefficients(eta, m, r, v2, rdot):
    return -m / (r * r), 0.0


@nb.njit
def first_pn_coefficients(eta, m, r, v2, rdot):
    mr = m / r
    scale = -mr / r
    n_coeff = -v2 + 2.0 * (2.0 + eta) * mr + 1.5 * eta * rdot * rdot
    v_coeff = 2.0 * (2.0 - eta) * rdot
    return scale * n_coeff, scale * v_coeff


@nb.njit
def second_pn_coefficients(eta, m, r, v2, rdot):
    mr = m / r
    mr2 = mr * mr
    rdot2 = rdot * rdot
    v4 = v2 * v2
    eta2 = eta * eta
    scale = -mr / r

    n_coeff = (
        -2.0 * (2.0 + 25.0 * eta + 2.0 * eta2) * mr2
        + 1.5 * eta * (3.0 - 4.0 * eta) * v4
        + 0.5 * eta * (13.0 - 4.0 * eta) * mr * v2
        - (2.0 + 15.0 * eta - 2.0 * eta2) * mr * rdot2
        - 1.875 * eta * (1.0 - 3.0 * eta) * rdot2 * rdot2
        + 1.5 * eta * (3.0 - 4.0 * eta) * v2 * rdot2
    )
    v_coeff = (
        -0.5 * eta * (15.0 + 4.0 * eta) * v2 * rdot
        + (4.0 + 41.0 * eta / 4.0 + eta2) * mr * rdot
        + 1.5 * eta * (3.0 + 2.0 * eta) * rdot * rdot2
    )
    return scale * n_coeff, scale * v_coeff


@nb.njit
def radiation_reaction_coefficients(eta, m, r, v2, rdot):
    # Burke-Thorne radiation reaction, dissipative: not derivable from a potential.
    mr = m / r
    rdot2 = rdot * rdot
    prefactor = 8.0 / 5.0 * eta * m * mr / (r * r)
    n_coeff = rdot * (18.0 * v2 + (2.0 / 3.0) * mr - 25.0 * rdot2)
    v_coeff = -(6.0 * v2 - 2.0 * mr - 15.0 * rdot2)
    return prefactor * n_coeff, prefactor * v_coeff
