import numpy as np
from hypothesis import given, settings, strategies as st

from bhcollision.integrators import IntegratorState, make_derivative, rk4_step
from bhcollision.physics import Body
from bhcollision.post_newtonian import body_accelerations


component = st.floats(min_value=-1.0, max_value=1.0, allow_nan=False, allow_infinity=False)
vec = st.tuples(component, component, component)
mass = st.floats(min_value=0.05, max_value=0.95)


@settings(max_examples=50, deadline=None)
@given(m1=mass, sep=st.floats(min_value=2.0, max_value=50.0), v1=vec, v2=vec)
def test_body_accelerations_conserve_momentum(m1, sep, v1, v2):
    m2 = 1.0 - m1
    b1 = Body(m1, [sep * m2, 0.0, 0.0], np.array(v1) * 0.3)
    b2 = Body(m2, [-sep * m1, 0.0, 0.0], np.array(v2) * 0.3)
    a1, a2 = body_accelerations(b1, b2)
    scale = max(np.linalg.norm(m1 * a1), 1e-300)
    assert np.all(np.abs(m1 * a1 + m2 * a2) <= 1e-12 * scale)


@settings(max_examples=20, deadline=None)
@given(m1=mass, sep=st.floats(min_value=5.0, max_value=30.0), flags=st.tuples(st.booleans(), st.booleans(), st.booleans()))
def test_rk4_step_conserves_total_momentum(m1, sep, flags):
    m2 = 1.0 - m1
    v = np.sqrt(1.0 / sep)
    state = IntegratorState(
        [[sep * m2, 0.0, 0.0], [-sep * m1, 0.0, 0.0]],
        [[0.0, 0.0, v * m2], [0.0, 0.0, -v * m1]],
    )
    deriv = make_derivative(m1, m2, *flags)
    masses = np.array([m1, m2])
    p0 = masses @ state.velocities
    for _ in range(20):
        state = rk4_step(state, 0.5, deriv)
    assert np.allclose(masses @ state.velocities, p0, atol=1e-13)
