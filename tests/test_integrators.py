import numpy as np
import pytest

from particle_sim import EULER, VERLET, get_integrator, vec
from particle_sim.core.integrators import Euler, Verlet


def test_euler_step_uses_pre_update_velocity():
    """
    x1 = x0 + v0 dt
    v1 = v0 + a dt
    """
    b = EULER.new_body()
    b.set_now(vec(1.0, 2.0, 3.0), vec(0.5, 0.0, -1.0))
    a = np.array([0.0, -10.0, 2.0])
    dt = 0.1

    EULER.integrate(b, a, dt)

    x, v = b.now()
    assert np.allclose(x, [1.05, 2.0, 2.9], rtol=0, atol=1e-15)
    assert np.allclose(v, [0.5, -1.0, -0.8], rtol=0, atol=1e-15)


def test_verlet_constant_acceleration():
    """
    From rest under constant a:
      x(dt) = x0 + a dt^2
      v(0)  = (x(dt) - x(-dt)) / 2dt = a dt / 2
    """
    b = VERLET.new_body()
    x0 = vec(1.0, 1.0, 1.0)
    b.set_now(x0, vec())
    b.set_before(1, x0, vec())
    a = np.array([0.0, -9.81, 0.0])
    dt = 0.01

    VERLET.integrate(b, a, dt)

    x_new, v_new = b.now()
    x_old, v_old = b.before(1)
    assert np.allclose(x_new, x0 + a * dt * dt, rtol=0, atol=1e-15)
    assert np.array_equal(v_new, np.zeros(3))
    assert np.array_equal(x_old, x0)
    assert np.allclose(v_old, a * dt / 2, rtol=0, atol=1e-12)


def test_verlet_free_flight_keeps_velocity():
    """Without force, x moves by the seeded displacement every step."""
    b = VERLET.new_body()
    b.set_now(vec(1.0), vec(1.0))
    b.set_before(1, vec(0.9), vec(1.0))
    for _ in range(10):
        VERLET.integrate(b, np.zeros(3), 0.1)
    assert abs(b.position[0] - 2.0) < 1e-12
    assert abs(b.before(1)[1][0] - 1.0) < 1e-12


def test_integrator_rejects_foreign_body():
    with pytest.raises(ValueError):
        EULER.integrate(VERLET.new_body(), np.zeros(3), 0.1)
    with pytest.raises(ValueError):
        VERLET.integrate(EULER.new_body(), np.zeros(3), 0.1)


@pytest.mark.parametrize("dt", [0.0, -0.1])
def test_integrate_rejects_non_positive_dt(dt):
    """Verlet divides by 2 dt; a zero step must fail instead of writing inf/nan."""
    b = VERLET.new_body()
    b.set_now(vec(1.0), vec())
    b.set_before(1, vec(0.5), vec())
    with pytest.raises(ValueError):
        VERLET.integrate(b, np.zeros(3), dt)
    assert np.array_equal(b.now()[0], [1.0, 0.0, 0.0])
    assert np.array_equal(b.before(1)[0], [0.5, 0.0, 0.0])

    e = EULER.new_body()
    with pytest.raises(ValueError):
        EULER.integrate(e, np.zeros(3), dt)


def test_equivalent_instances_accept_each_others_bodies():
    b = Verlet().new_body()
    b.set_before(1, vec(), vec())
    VERLET.integrate(b, np.zeros(3), 0.1)


def test_history_shape():
    assert (EULER.state_depth, EULER.current_index) == (1, 0)
    assert (VERLET.state_depth, VERLET.current_index) == (2, 0)


def test_get_integrator():
    assert get_integrator("euler") is EULER
    assert get_integrator("Verlet") is VERLET
    inst = Euler()
    assert get_integrator(inst) is inst
    with pytest.raises(ValueError):
        get_integrator("rk4")
