# MIT License (see LICENSE)
"""
Utilities for calculating physical invariants and conserved quantities.

Used for verifying simulation correctness and comparing integrators. In a
closed spring system total energy and momentum should stay constant (within
integration error).

Verlet bodies only know their velocity one step late, so every function takes
a ``lag`` argument selecting the state ``body.before(lag)``; use ``lag=1`` for
Verlet systems and the default ``lag=0`` for Euler.
"""
from __future__ import annotations
from collections.abc import Sequence

import numpy as np

from ..body import Body


def kinetic_energy(bodies: Sequence[Body], lag: int = 0) -> float:
    """
    Total kinetic energy T = sum 1/2 m v^2.

    Args:
        bodies: Bodies of the system.
        lag: History offset of the state to evaluate.
    """
    ke = 0.0
    for b in bodies:
        _, v = b.before(lag)
        ke += 0.5 * b.mass * float(np.dot(v, v))
    return ke


def linear_momentum(bodies: Sequence[Body], lag: int = 0) -> np.ndarray:
    """Total linear momentum P = sum m v."""
    p = np.zeros(3, dtype=np.float64)
    for b in bodies:
        _, v = b.before(lag)
        p += b.mass * v
    return p


def center_of_mass(bodies: Sequence[Body], lag: int = 0) -> np.ndarray:
    """Mass-weighted mean position. An empty body list has none (ValueError)."""
    if not bodies:
        raise ValueError("center of mass of an empty body list")
    total = 0.0
    r = np.zeros(3, dtype=np.float64)
    for b in bodies:
        x, _ = b.before(lag)
        r += b.mass * x
        total += b.mass
    return r / total


def total_energy(bodies: Sequence[Body], potential, lag: int = 0) -> float:
    """
    Kinetic plus potential energy of the state ``before(lag)``.

    ``potential`` is any force exposing ``potential_energy(bodies, lag)``
    (Hooke, HarmonicWell). Velocities and positions come from the same slot,
    so stepped Verlet systems need ``lag=1``.
    """
    return kinetic_energy(bodies, lag) + potential.potential_energy(bodies, lag)


def oscillator_energy(body: Body, k: float, lag: int = 0) -> float:
    """Energy of a single body in a harmonic well of constant k at the origin."""
    x, v = body.before(lag)
    return 0.5 * body.mass * float(np.dot(v, v)) + 0.5 * k * float(np.dot(x, x))
