# MIT License (see LICENSE)
"""
Numerical integrators for point-mass dynamics.

An integrator is a stateless strategy. It tells a Body how many history slots
it needs and which one is "now", and it advances one body by dt given the
acceleration computed for it. Both schemes solve

    dx/dt = v,    dv/dt = a

Available integrators:
- EULER: explicit Euler, one history slot.
- VERLET: position (Stormer) Verlet, two history slots.

A body is bound to the integrator that created it; stepping it with another
one raises ValueError.

Reference:
    Verlet integration: https://en.wikipedia.org/wiki/Verlet_integration
"""
from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from ..body import Body
from ..vector import ZERO


class Integrator(ABC):
    """Base class for time-stepping schemes."""

    name: str = ""
    state_depth: int = 1
    current_index: int = 0

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def new_body(self, mass: float = 1.0) -> Body:
        """Create a body whose history is shaped for this integrator."""
        return Body(self, mass)

    def _check(self, body: Body, dt: float) -> None:
        if not dt > 0.0:
            raise ValueError(f"time step must be positive, got {dt}")
        if body.integrator is not self and type(body.integrator) is not type(self):
            raise ValueError(
                f"body was created for {body.integrator.name!r}, "
                f"cannot integrate it with {self.name!r}"
            )

    @abstractmethod
    def integrate(self, body: Body, accel: np.ndarray, dt: float) -> None:
        """
        Advance one body by dt under the given acceleration (in-place).

        Raises ValueError for a body of another integrator or for dt <= 0.
        """


class Euler(Integrator):
    """
    Explicit Euler.

        v1 = v0 + a dt
        x1 = x0 + v0 dt

    The position update uses the velocity from before the step. Local error
    is O(dt^2), global error O(dt).
    """

    name = "euler"
    state_depth = 1
    current_index = 0

    def integrate(self, body: Body, accel: np.ndarray, dt: float) -> None:
        self._check(body, dt)
        x0, v0 = body.now()
        v1 = v0 + accel * dt
        x1 = x0 + v0 * dt
        body.shift(x1, v1)


class Verlet(Integrator):
    """
    Position Verlet with a central-difference velocity.

        x(t+dt) = 2 x(t) - x(t-dt) + a(t) dt^2
        v(t)    = (x(t+dt) - x(t-dt)) / (2 dt)

    Needs the current position and the one from the previous step, so the
    body keeps two slots: ``now()`` and ``before(1)``. Velocity is not
    integrated; it is derived once the next position is known, so it lags
    one step behind. Right after a step ``now()`` carries a zero velocity and
    the velocity of ``before(1)`` is the valid, freshly computed one.

    Seeding: set the current state with ``set_now`` and the position one step
    earlier with ``set_before(1, ...)``.

    Local error is O(dt^4), global error O(dt^2).
    """

    name = "verlet"
    state_depth = 2
    current_index = 0

    def integrate(self, body: Body, accel: np.ndarray, dt: float) -> None:
        self._check(body, dt)
        x_past, _ = body.before(1)
        x_now, _ = body.now()
        x_next = 2.0 * x_now - x_past + accel * (dt * dt)

        body.shift(x_next, ZERO)
        # x_now has just become before(1); its velocity is now known
        body.set_before(1, x_now, (x_next - x_past) / (2.0 * dt))


EULER: Integrator = Euler()
VERLET: Integrator = Verlet()

_BY_NAME: dict[str, Integrator] = {EULER.name: EULER, VERLET.name: VERLET}


def get_integrator(integrator: str | Integrator) -> Integrator:
    """
    Resolve an integrator from its name ("euler", "verlet") or pass an
    Integrator instance through unchanged.
    """
    if isinstance(integrator, Integrator):
        return integrator
    try:
        return _BY_NAME[str(integrator).lower()]
    except KeyError:
        raise ValueError(f"Unknown integrator: {integrator}") from None
