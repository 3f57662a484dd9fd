# MIT License (see LICENSE)
"""
The simulation system and its step protocol.

A System owns a fixed list of bodies, the integrator they were all created
for and the (possibly composed) force acting on them. Each step runs in two
phases:

    1. Gather: compute every body's acceleration from the unmodified
       pre-step state into a scratch array.
    2. Commit: integrate each body with its own acceleration.

No body is moved before all accelerations are known. Interleaving the two
(force, move, force, move, ...) would let later bodies see already advanced
neighbours and silently corrupt any position-dependent force.

Structure:
    - User creates a System with an integrator and a body count.
    - User seeds masses and initial states through system.body(i).
    - User sets forces with set_force()/add_force().
    - User calls system.step(dt) in a loop and reads bodies in between.
"""
from __future__ import annotations
import logging
import operator
from collections.abc import Callable, Sequence
from contextlib import nullcontext
from dataclasses import dataclass, field

import numpy as np

from .body import Body
from .core.forces import Force, combine
from .core.integrators import Integrator, get_integrator
from .profiler import Profiler

logger = logging.getLogger(__name__)


def _gather(force: Force | None, bodies: Sequence[Body], out: np.ndarray) -> np.ndarray:
    # Reads bodies only; every acceleration sees the same state
    if force is None:
        out[:] = 0.0
    else:
        for i in range(len(bodies)):
            out[i] = force.accel(bodies, i)
    return out


def step(integrator: Integrator, bodies: Sequence[Body], force: Force | None, dt: float,
         scratch: np.ndarray | None = None) -> None:
    """
    Advance a plain list of bodies by one gather-then-commit step.

    Args:
        integrator: Integrator the bodies were created for.
        bodies: Bodies to advance (modified in-place).
        force: Force acting on the bodies; None means free motion.
        dt: Time step, must be positive.
        scratch: Optional preallocated (len(bodies), 3) array that receives
            the accelerations.
    """
    dt = float(dt)
    if not dt > 0.0:
        raise ValueError(f"time step must be positive, got {dt}")
    n = len(bodies)
    accels = np.zeros((n, 3), dtype=np.float64) if scratch is None else scratch

    _gather(force, bodies, accels)

    for i, b in enumerate(bodies):
        integrator.integrate(b, accels[i], dt)


@dataclass
class System:
    """
    A set of bodies advanced together under one force and one integrator.

    Attributes:
        integrator: Integration scheme, an Integrator or its name ("euler",
            "verlet"). Shared by all bodies; fixed for the system's lifetime.
        n_bodies: Number of bodies, allocated at construction with mass 1.0
            and zero state. Must be a non-negative integer.
        profiler: Optional Profiler timing the "forces" and "integrate" phases.
        force: Current force, None until set.
        time: Simulated time elapsed through step().
        steps: Number of steps taken.
    """
    integrator: Integrator | str = "euler"
    n_bodies: int = 0
    profiler: Profiler | None = None

    force: Force | None = field(default=None, init=False)
    time: float = field(default=0.0, init=False)
    steps: int = field(default=0, init=False)
    bodies: list[Body] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self.integrator = get_integrator(self.integrator)
        try:
            self.n_bodies = operator.index(self.n_bodies)
        except TypeError:
            raise TypeError(f"body count must be an integer, got {self.n_bodies!r}") from None
        if self.n_bodies < 0:
            raise ValueError(f"body count must not be negative, got {self.n_bodies}")
        self.bodies = [self.integrator.new_body() for _ in range(self.n_bodies)]
        # Reused by every step
        self._accels = np.zeros((self.n_bodies, 3), dtype=np.float64)
        logger.debug("created system of %d bodies using %s", self.n_bodies, self.integrator.name)

    def __len__(self) -> int:
        return len(self.bodies)

    def __iter__(self):
        return iter(self.bodies)

    def body(self, i: int) -> Body:
        """The i-th body. Negative or too large indices raise IndexError."""
        if not 0 <= i < len(self.bodies):
            raise IndexError(f"body index {i} out of range for a system of {len(self.bodies)} bodies")
        return self.bodies[i]

    def set_force(self, force: Force | None) -> None:
        """Replace the system force."""
        if force is not None and not isinstance(force, Force):
            raise TypeError(f"not a Force: {force!r}")
        self.force = force
        logger.debug("force set to %r", force)

    def add_force(self, force: Force) -> None:
        """Add a force on top of the current one (or set it if there is none)."""
        if self.force is None:
            self.set_force(force)
        else:
            self.set_force(combine(self.force, force))

    def _section(self, name: str):
        if self.profiler is None:
            return nullcontext()
        return self.profiler.section(name)

    def accelerations(self) -> np.ndarray:
        """
        Accelerations of all bodies in the current state, shape (n, 3).

        This is the gather phase of step(); nothing is modified.
        """
        out = np.zeros((len(self.bodies), 3), dtype=np.float64)
        return _gather(self.force, self.bodies, out)

    def step(self, dt: float) -> None:
        """Advance every body by dt (gather all accelerations, then integrate)."""
        dt = float(dt)
        if not dt > 0.0:
            raise ValueError(f"time step must be positive, got {dt}")

        accels = self._accels
        with self._section("forces"):
            _gather(self.force, self.bodies, accels)

        with self._section("integrate"):
            for i, b in enumerate(self.bodies):
                self.integrator.integrate(b, accels[i], dt)

        self.time += dt
        self.steps += 1

    def run(self, dt: float, n_steps: int, callback: Callable[[System], None] | None = None) -> None:
        """
        Take n_steps steps of size dt.

        Args:
            dt: Time step.
            n_steps: Number of steps.
            callback: Called as callback(system) after every step.
        """
        for _ in range(int(n_steps)):
            self.step(dt)
            if callback is not None:
                callback(self)
