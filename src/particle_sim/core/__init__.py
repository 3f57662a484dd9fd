# MIT License (see LICENSE)
"""
Core particle dynamics components.

This subpackage provides:
    - Forces: Hooke spring networks, harmonic wells, uniform fields,
      constant forces, and their composition (sums and masks).
    - Integrators: explicit Euler and position Verlet.
    - Invariants: energy and momentum diagnostics.

Typical usage:
    from particle_sim.core import VERLET, Hooke, masked

    force = masked(Hooke.empty(4), 0)
    body = VERLET.new_body(mass=2.0)
"""
from .forces import (
    Force,
    SumForce,
    MaskedForce,
    Spring,
    Hooke,
    HarmonicWell,
    UniformField,
    ConstantForce,
    combine,
    masked,
)
from .integrators import Integrator, Euler, Verlet, EULER, VERLET, get_integrator
from .invariants import kinetic_energy, linear_momentum, center_of_mass, total_energy, oscillator_energy

__all__ = [
    # Forces
    "Force",
    "SumForce",
    "MaskedForce",
    "Spring",
    "Hooke",
    "HarmonicWell",
    "UniformField",
    "ConstantForce",
    "combine",
    "masked",
    # Integrators
    "Integrator",
    "Euler",
    "Verlet",
    "EULER",
    "VERLET",
    "get_integrator",
    # Invariants
    "kinetic_energy",
    "linear_momentum",
    "center_of_mass",
    "total_energy",
    "oscillator_energy",
]
