# MIT License (see LICENSE)
"""
particle_sim - A small N-body particle dynamics engine.

This package advances sets of point masses in fixed time steps under
composable force laws, keeping a short position/velocity history per body.

Main entry points:
    - System: The bodies, their integrator and force, and the step loop.
    - Body: A point mass with its state history.
    - EULER, VERLET: The available integrators.
    - Hooke, Spring: Pairwise spring networks.
    - combine, masked: Force composition.

Submodules:
    - core: Forces, integrators and invariants.
    - lattice: Rectangular spring lattice builder.
    - vector: 3D vector helpers.
    - profiler: Step phase timing.

Example:
    from particle_sim import System, HarmonicWell, vec

    system = System("euler", 1)
    system.set_force(HarmonicWell(k=1.0))
    system.body(0).set_now(vec(1.0, 0.0, 0.0), vec())
    for _ in range(1000):
        system.step(1e-3)
"""
from .body import Body
from .system import System, step
from .core.forces import Force, SumForce, MaskedForce, Spring, Hooke, HarmonicWell, UniformField, ConstantForce, combine, masked
from .core.integrators import Integrator, EULER, VERLET, get_integrator
from .lattice import rectangular_lattice
from .vector import vec, ZERO, UNIT_X, UNIT_Y, UNIT_Z

__all__ = [
    # Simulation
    "System",
    "Body",
    "step",
    "rectangular_lattice",
    # Integrators
    "Integrator",
    "EULER",
    "VERLET",
    "get_integrator",
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
    # Vectors
    "vec",
    "ZERO",
    "UNIT_X",
    "UNIT_Y",
    "UNIT_Z",
]

__version__ = "0.1.0"
