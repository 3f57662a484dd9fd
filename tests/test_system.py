import numpy as np
import pytest

from particle_sim import (
    EULER,
    VERLET,
    Force,
    Hooke,
    Spring,
    SumForce,
    System,
    UniformField,
    step,
    vec,
)
from particle_sim.profiler import Profiler


class PositionSpy(Force):
    """Records every position the force sees."""

    def __init__(self):
        self.seen = []

    def accel(self, bodies, i):
        self.seen.append([b.position.copy() for b in bodies])
        return np.zeros(3)


def spring_pair(system, k=1.0, l0=0.0, x1=1.0):
    system.set_force(Hooke([[Spring(), Spring(k, l0)], [Spring(k, l0), Spring()]]))
    b0, b1 = system.body(0), system.body(1)
    b0.set_now(vec(0.0), vec())
    b1.set_now(vec(x1), vec())
    for b in (b0, b1):
        for lag in range(1, b.depth):
            x, _ = b.now()
            b.set_before(lag, x, vec())


def test_allocates_bodies_bound_to_integrator():
    sys = System("verlet", 3)
    assert sys.integrator is VERLET
    assert len(sys) == sys.n_bodies == 3
    assert all(b.integrator is VERLET for b in sys)
    assert sys.force is None


def test_body_index_is_checked():
    sys = System(EULER, 2)
    sys.body(1)
    with pytest.raises(IndexError):
        sys.body(2)
    with pytest.raises(IndexError):
        sys.body(-1)


def test_negative_body_count_rejected():
    with pytest.raises(ValueError):
        System("euler", -1)


def test_body_count_must_be_integer():
    with pytest.raises(TypeError):
        System("euler", 2.7)
    with pytest.raises(TypeError):
        System("euler", "3")
    sys = System("euler", np.int64(3))
    assert len(sys) == 3


def test_state_is_not_a_constructor_argument():
    """force, time and steps start at None, 0.0 and 0 and change only through the API."""
    with pytest.raises(TypeError):
        System("euler", 1, force=UniformField((0.0, -9.81, 0.0)))
    with pytest.raises(TypeError):
        System("euler", 1, time=5.0)
    with pytest.raises(TypeError):
        System("euler", 1, steps=3)
    sys = System("euler", 1)
    assert (sys.force, sys.time, sys.steps) == (None, 0.0, 0)


def test_set_and_add_force():
    sys = System("euler", 1)
    g1 = UniformField((1.0, 0.0, 0.0))
    g2 = UniformField((0.0, 1.0, 0.0))
    g3 = UniformField((0.0, 0.0, 1.0))

    sys.add_force(g1)
    assert sys.force is g1

    sys.add_force(g2)
    sys.add_force(g3)
    assert isinstance(sys.force, SumForce)
    assert list(sys.force) == [g1, g2, g3]

    sys.set_force(g2)
    assert sys.force is g2

    with pytest.raises(TypeError):
        sys.set_force(42)


def test_step_without_force_is_free_motion():
    sys = System("euler", 1)
    sys.body(0).set_now(vec(0.0), vec(2.0))
    sys.run(0.25, 4)
    assert np.allclose(sys.body(0).position, [2.0, 0.0, 0.0])
    assert sys.time == pytest.approx(1.0)
    assert sys.steps == 4


@pytest.mark.parametrize("dt", [0.0, -0.1])
def test_non_positive_dt_rejected(dt):
    sys = System("euler", 1)
    with pytest.raises(ValueError):
        sys.step(dt)
    with pytest.raises(ValueError):
        step(EULER, sys.bodies, None, dt)


def test_gather_then_commit_ordering():
    """
    Two bodies joined by a spring (k=1, l0=0) at x=0 and x=1, at rest, Verlet.

    Gather-then-commit: a0 = +1, a1 = -1, so after one step of dt=0.1
      x0 = 0.01, x1 = 0.99.
    Moving body 0 before evaluating body 1 would give a1 = -0.98 and
      x1 = 0.9902 instead.
    """
    dt = 0.1
    sys = System("verlet", 2)
    spring_pair(sys)
    sys.step(dt)

    x0 = sys.body(0).position[0]
    x1 = sys.body(1).position[0]
    assert abs(x0 - 0.01) < 1e-12
    assert abs(x1 - 0.99) < 1e-12
    assert abs(x1 - 0.9902) > 1e-5


def test_forces_see_only_pre_step_state():
    sys = System("euler", 3)
    for i in range(3):
        sys.body(i).set_now(vec(float(i)), vec(1.0))
    spy = PositionSpy()
    sys.set_force(spy)

    sys.step(0.5)

    assert len(spy.seen) == 3
    for snapshot in spy.seen:
        assert [x[0] for x in snapshot] == [0.0, 1.0, 2.0]
    assert [b.position[0] for b in sys] == [0.5, 1.5, 2.5]


def test_free_step_function_matches_system():
    sys_a = System("verlet", 2)
    sys_b = System("verlet", 2)
    spring_pair(sys_a, k=2.0, l0=0.5, x1=1.3)
    spring_pair(sys_b, k=2.0, l0=0.5, x1=1.3)

    scratch = np.zeros((2, 3))
    for _ in range(20):
        sys_a.step(0.05)
        step(sys_b.integrator, sys_b.bodies, sys_b.force, 0.05, scratch=scratch)

    for a, b in zip(sys_a, sys_b):
        assert np.array_equal(a.position, b.position)
        assert np.array_equal(a.before(1)[1], b.before(1)[1])


def test_accelerations_snapshot_does_not_step():
    sys = System("euler", 2)
    spring_pair(sys, k=1.0, l0=0.0, x1=1.0)
    a = sys.accelerations()
    assert np.allclose(a, [[1.0, 0.0, 0.0], [-1.0, 0.0, 0.0]])
    assert sys.steps == 0
    assert sys.body(1).position[0] == 1.0


@pytest.mark.parametrize("integrator", ["euler", "verlet"])
def test_spring_equilibrium_is_stationary(integrator):
    sys = System(integrator, 2)
    spring_pair(sys, k=1.0, l0=1.0, x1=1.0)
    sys.run(0.01, 1000)
    assert abs(sys.body(0).position[0]) < 1e-12
    assert abs(sys.body(1).position[0] - 1.0) < 1e-12
    assert np.allclose(sys.body(0).velocity, 0.0, atol=1e-12)


def test_run_callback_and_profiler():
    prof = Profiler()
    sys = System("euler", 2, profiler=prof)
    sys.set_force(UniformField((0.0, -1.0, 0.0)))
    ticks = []
    sys.run(0.1, 5, callback=lambda s: ticks.append(s.steps))
    assert ticks == [1, 2, 3, 4, 5]
    summary = prof.stats.summary()
    assert summary["forces"]["n"] == 5
    assert summary["integrate"]["n"] == 5
