"""
A square spring lattice hanging from its top row.

Run:
  python examples/square_lattice.py
"""
from particle_sim import UniformField, masked, rectangular_lattice
from particle_sim.lattice import lattice_index

rows, cols = 5, 5
sys = rectangular_lattice("verlet", rows, cols, spacing=1.0, k=40.0, mass=1.0)

pins = [lattice_index(rows - 1, c, cols) for c in range(cols)]
sys.set_force(masked(sys.force, *pins))
sys.add_force(masked(UniformField((0.0, -1.0, 0.0)), *pins))

for _ in range(500):
    sys.step(0.01)

for r in range(rows):
    row = [sys.body(lattice_index(r, c, cols)).position for c in range(cols)]
    print("  ".join(f"({x[0]:5.2f},{x[1]:5.2f})" for x in row))
