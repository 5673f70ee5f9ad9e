import math

from bhcollision.analysis import compute_orbital_params
from bhcollision.integrators import IntegratorState, make_derivative, orbital_period, rk4_step
from bhcollision.physics import Body


def _circular_pair(r0=20.0):
    v = math.sqrt(1.0 / r0)
    b1 = Body(0.5, [r0 / 2, 0, 0], [0, 0, v / 2])
    b2 = Body(0.5, [-r0 / 2, 0, 0], [0, 0, -v / 2])
    return b1, b2


def _energy(state):
    b1 = Body(0.5, state.pos1, state.vel1)
    b2 = Body(0.5, state.pos2, state.vel2)
    return compute_orbital_params(b1, b2).energy


def test_newtonian_energy_conserved_over_one_orbit():
    b1, b2 = _circular_pair(20.0)
    state = IntegratorState.from_bodies(b1, b2)
    deriv = make_derivative(0.5, 0.5, enable_1pn=False, enable_2pn=False, enable_25pn=False)
    e0 = _energy(state)

    dt = 0.1
    steps = int(orbital_period(20.0, 1.0) / dt)
    for _ in range(steps):
        state = rk4_step(state, dt, deriv)

    assert abs((_energy(state) - e0) / e0) < 1e-6
    # back close to the starting point after one period
    assert math.isclose(state.separation, 20.0, rel_tol=1e-4)


def test_radiation_reaction_shrinks_the_orbit():
    b1, b2 = _circular_pair(20.0)
    conservative = IntegratorState.from_bodies(b1, b2)
    radiating = IntegratorState.from_bodies(b1, b2)
    newton = make_derivative(0.5, 0.5, enable_1pn=False, enable_2pn=False, enable_25pn=False)
    with_rr = make_derivative(0.5, 0.5, enable_1pn=False, enable_2pn=False, enable_25pn=True)

    e0 = _energy(radiating)
    for _ in range(2000):
        conservative = rk4_step(conservative, 0.5, newton)
        radiating = rk4_step(radiating, 0.5, with_rr)

    assert math.isclose(conservative.separation, 20.0, rel_tol=1e-4)
    # Peters: dr/dt = -(64/5) eta M^3 / r^3 = -4e-4 at r = 20, over 1000 M
    shrink = 20.0 - radiating.separation
    assert 0.2 < shrink < 0.8
    assert _energy(radiating) < e0
