# MIT License (see LICENSE)
"""
Builders for spring lattices.

``rectangular_lattice`` lays out rows x cols bodies on a grid in the XY plane
and joins horizontal and vertical neighbours with identical springs at their
rest length, so the lattice starts in equilibrium. Body (r, c) has index
``r * cols + c``.
"""
from __future__ import annotations

from .core.forces import Hooke
from .core.integrators import Integrator
from .profiler import Profiler
from .system import System
from .vector import ZERO, vec


def lattice_index(row: int, col: int, cols: int) -> int:
    """Body index of the grid node (row, col)."""
    return row * cols + col


def lattice_springs(rows: int, cols: int, k: float = 1.0, spacing: float = 1.0) -> Hooke:
    """Hooke network connecting the 4-neighbourhood of a rows x cols grid."""
    h = Hooke.empty(rows * cols)
    for r in range(rows):
        for c in range(cols):
            i = lattice_index(r, c, cols)
            if c + 1 < cols:
                h.connect(i, lattice_index(r, c + 1, cols), k, spacing)
            if r + 1 < rows:
                h.connect(i, lattice_index(r + 1, c, cols), k, spacing)
    return h


def rectangular_lattice(
    integrator: Integrator | str,
    rows: int,
    cols: int,
    spacing: float = 1.0,
    k: float = 1.0,
    mass: float = 1.0,
    profiler: Profiler | None = None,
) -> System:
    """
    A resting rectangular spring lattice.

    Bodies are seeded at rest: for two-slot integrators the previous slot
    holds the same position, so the first step sees zero velocity too.

    Returns:
        System with the bodies placed and the Hooke force set.
    """
    if rows < 1 or cols < 1:
        raise ValueError(f"lattice needs at least one row and column, got {rows}x{cols}")
    system = System(integrator, rows * cols, profiler=profiler)
    for r in range(rows):
        for c in range(cols):
            b = system.body(lattice_index(r, c, cols))
            b.set_mass(mass)
            x = vec(c * spacing, r * spacing, 0.0)
            b.set_now(x, ZERO)
            for lag in range(1, b.depth):
                b.set_before(lag, x, ZERO)
    system.set_force(lattice_springs(rows, cols, k=k, spacing=spacing))
    return system
