# MIT License (see LICENSE)
"""
Point-mass bodies with a bounded state history.

A Body keeps the last few (position, velocity) pairs of one particle in two
fixed-length lists, newest first: ``shift`` pushes a state into slot 0 and
drops the oldest one. How many slots exist and which of them is "now" is
decided by the integrator the body is built for:

  - Euler:  1 slot, now = slot 0.
  - Verlet: 2 slots, now = slot 0, slot 1 = one step earlier.

Relative accessors (``before``/``after``) count slots from "now" towards
older/newer states. Offsets that fall outside the history raise IndexError;
they are never clamped and never wrap around.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from .vector import ZERO, as_vector

if TYPE_CHECKING:  # Avoid circular import during runtime
    from .core.integrators import Integrator


class Body:
    """
    A single particle bound to one integrator.

    Attributes:
        integrator: The integrator that sized this body's history. Stepping
            the body with any other integrator is rejected.
        mass: Mass of the particle, strictly positive.
    """

    __slots__ = ("integrator", "_mass", "_xs", "_vs", "_now")

    def __init__(self, integrator: Integrator, mass: float = 1.0) -> None:
        depth = int(integrator.state_depth)
        now = int(integrator.current_index)
        if depth < 1 or not 0 <= now < depth:
            raise ValueError(
                f"integrator {integrator.name!r} has invalid history shape "
                f"(depth={depth}, current={now})"
            )
        self.integrator = integrator
        self._xs: list[np.ndarray] = [ZERO] * depth
        self._vs: list[np.ndarray] = [ZERO] * depth
        self._now = now
        self._mass = 0.0
        self.set_mass(mass)

    def __repr__(self) -> str:
        x, v = self.now()
        return (
            f"Body(mass={self._mass}, x={x.tolist()}, v={v.tolist()}, "
            f"integrator={self.integrator.name!r})"
        )

    # ------------------------------------------------------------------
    # Mass
    # ------------------------------------------------------------------

    @property
    def mass(self) -> float:
        return self._mass

    def set_mass(self, mass: float) -> None:
        """Set the particle mass. Only meant for seeding, before stepping."""
        mass = float(mass)
        if not mass > 0.0:
            raise ValueError(f"body mass must be positive, got {mass}")
        self._mass = mass

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    @property
    def depth(self) -> int:
        """Number of history slots."""
        return len(self._xs)

    @property
    def positions(self) -> tuple[np.ndarray, ...]:
        """Position history, newest first."""
        return tuple(self._xs)

    @property
    def velocities(self) -> tuple[np.ndarray, ...]:
        """Velocity history, newest first."""
        return tuple(self._vs)

    def shift(self, position, velocity) -> None:
        """Push a new state into slot 0, discarding the oldest slot."""
        x, v = as_vector(position), as_vector(velocity)
        self._xs.pop()
        self._vs.pop()
        self._xs.insert(0, x)
        self._vs.insert(0, v)

    def _slot(self, offset: int) -> int:
        # offset > 0 is older, offset < 0 is newer
        i = self._now + offset
        if not 0 <= i < len(self._xs):
            raise IndexError(
                f"history offset {offset} out of range for a body with "
                f"{len(self._xs)} slot(s) (current slot {self._now})"
            )
        return i

    def _get(self, offset: int) -> tuple[np.ndarray, np.ndarray]:
        i = self._slot(offset)
        return self._xs[i], self._vs[i]

    def _set(self, offset: int, position, velocity) -> None:
        i = self._slot(offset)
        self._xs[i] = as_vector(position)
        self._vs[i] = as_vector(velocity)

    def now(self) -> tuple[np.ndarray, np.ndarray]:
        """Current (position, velocity)."""
        return self._get(0)

    def set_now(self, position, velocity) -> None:
        """Overwrite the current state. Used to seed initial conditions."""
        self._set(0, position, velocity)

    def before(self, k: int) -> tuple[np.ndarray, np.ndarray]:
        """State k steps older than the current one."""
        return self._get(k)

    def after(self, k: int) -> tuple[np.ndarray, np.ndarray]:
        """State k steps newer than the current one."""
        return self._get(-k)

    def set_before(self, k: int, position, velocity) -> None:
        self._set(k, position, velocity)

    def set_after(self, k: int, position, velocity) -> None:
        self._set(-k, position, velocity)

    @property
    def position(self) -> np.ndarray:
        return self._xs[self._now]

    @property
    def velocity(self) -> np.ndarray:
        return self._vs[self._now]
