"""
Microbenchmark: time per step vs number of bodies in a spring lattice.
Run:
  python benchmarks/bench_steps.py
"""
import time

import numpy as np

from particle_sim import UniformField, rectangular_lattice
from particle_sim.profiler import Profiler


def run(side: int, integrator: str = "verlet", steps: int = 50):
    prof = Profiler()
    sys = rectangular_lattice(integrator, side, side, k=10.0, profiler=prof)
    sys.add_force(UniformField((0.0, -1.0, 0.0)))

    # perturb deterministically so the springs actually work
    rng = np.random.default_rng(12345)
    for b in sys:
        x = b.position + 0.01 * rng.normal(size=3)
        b.set_now(x, b.velocity)

    # warmup
    for _ in range(5):
        sys.step(1e-3)
    prof.stats.reset()

    t0 = time.perf_counter()
    for _ in range(steps):
        sys.step(1e-3)
    t1 = time.perf_counter()

    per_step = (t1 - t0) / steps
    return per_step, prof.stats.summary()


if __name__ == "__main__":
    for side in [2, 4, 8, 12, 16]:
        per_step, summary = run(side)
        print(f"N={side * side:4d}  step={1e3*per_step:8.3f} ms  steps/s={1/per_step:8.1f}")
        for k in ["forces", "integrate"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
