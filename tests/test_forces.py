import math

import numpy as np

from bhcollision.physics import Body
from bhcollision.post_newtonian import (
    PN_TERMS,
    active_terms,
    body_accelerations,
    compute_acceleration,
    compute_relative_acceleration,
)


def test_newtonian_term_is_inverse_square():
    acc = compute_relative_acceleration(
        [10.0, 0.0, 0.0], [0.0, 0.0, 0.3], 0.5, 0.5,
        enable_1pn=False, enable_2pn=False, enable_25pn=False,
    )
    assert math.isclose(acc.newtonian[0], -1.0 / 100.0, rel_tol=1e-12)
    assert np.allclose(acc.newtonian[1:], 0.0)
    assert np.allclose(acc.first_pn, 0.0)
    assert np.allclose(acc.second_pn, 0.0)
    assert np.allclose(acc.radiation_reaction, 0.0)
    assert np.allclose(acc.total(), acc.newtonian)


def test_zero_separation_gives_zero_acceleration():
    acc = compute_relative_acceleration([0.0, 0.0, 0.0], [0.1, 0.0, 0.0], 0.5, 0.5)
    for part in (acc.newtonian, acc.first_pn, acc.second_pn, acc.radiation_reaction):
        assert np.all(np.isfinite(part))
        assert np.allclose(part, 0.0)


def test_pn_corrections_are_small_at_large_separation():
    r = 100.0
    v = math.sqrt(1.0 / r)
    acc = compute_relative_acceleration([r, 0.0, 0.0], [0.0, 0.0, v], 0.5, 0.5)
    newton = np.linalg.norm(acc.newtonian)
    assert np.linalg.norm(acc.first_pn) < 0.1 * newton
    assert np.linalg.norm(acc.second_pn) < np.linalg.norm(acc.first_pn)
    assert np.linalg.norm(acc.radiation_reaction) < np.linalg.norm(acc.second_pn)


def test_radiation_reaction_opposes_circular_motion():
    r = 20.0
    v = np.array([0.0, 0.0, math.sqrt(1.0 / r)])
    acc = compute_relative_acceleration([r, 0.0, 0.0], v, 0.5, 0.5)
    # energy is removed from the orbit
    assert np.dot(acc.radiation_reaction, v) < 0.0


def test_radiation_reaction_matches_peters_luminosity_on_circular_orbit():
    r = 20.0
    m1 = m2 = 0.5
    mu = m1 * m2
    v = np.array([0.0, 0.0, math.sqrt(1.0 / r)])
    acc = compute_relative_acceleration([r, 0.0, 0.0], v, m1, m2)
    de_dt = mu * np.dot(acc.radiation_reaction, v)
    peters = -(32.0 / 5.0) * 0.25 ** 2 / r ** 5
    assert math.isclose(de_dt, peters, rel_tol=1e-9)


def test_flags_select_terms():
    names = [t.name for t in active_terms(enable_1pn=False, enable_2pn=True, enable_25pn=False)]
    assert names == ["newtonian", "second_pn"]
    assert len(active_terms()) == len(PN_TERMS)

    acc = compute_relative_acceleration(
        [5.0, 0.0, 0.0], [0.0, 0.0, 0.4], 0.5, 0.5, enable_1pn=False, enable_25pn=False
    )
    assert np.allclose(acc.first_pn, 0.0)
    assert np.allclose(acc.radiation_reaction, 0.0)
    assert np.linalg.norm(acc.second_pn) > 0.0


def test_body_acceleration_scaled_by_companion_fraction():
    b1 = Body(0.8, [2.0, 0.0, 0.0], [0.0, 0.0, 0.05])
    b2 = Body(0.2, [-8.0, 0.0, 0.0], [0.0, 0.0, -0.2])
    rel = compute_relative_acceleration(b1.pos - b2.pos, b1.vel - b2.vel, b1.mass, b2.mass)
    acc1 = compute_acceleration(b1, b2)
    assert np.allclose(acc1.total(), 0.2 * rel.total())

    a1, a2 = body_accelerations(b1, b2)
    assert np.allclose(b1.mass * a1 + b2.mass * a2, 0.0, atol=1e-15)
    assert np.allclose(a1 - a2, rel.total())
