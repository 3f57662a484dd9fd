"""
Harmonic oscillator: Euler and Verlet against the analytic solution.

    x(t) = A cos(wt),  v(t) = -A w sin(wt),  w = sqrt(k/m)

Run:
  python examples/shm.py
"""
import numpy as np

from particle_sim import System, HarmonicWell, vec

k, m, A = 1.0, 1.0, 1.0
dt, steps = 0.05, 200
omega = np.sqrt(k / m)


def analytic(t):
    return A * np.cos(omega * t), -A * omega * np.sin(omega * t)


euler = System("euler", 1)
euler.set_force(HarmonicWell(k))
euler.body(0).set_mass(m)
euler.body(0).set_now(vec(A), vec())

verlet = System("verlet", 1)
verlet.set_force(HarmonicWell(k))
verlet.body(0).set_mass(m)
verlet.body(0).set_now(vec(A), vec())
xp, vp = analytic(-dt)
verlet.body(0).set_before(1, vec(xp), vec(vp))

print(f"{'t':>6} {'x':>10} {'x_euler':>10} {'x_verlet':>10} {'err_e':>10} {'err_v':>10}")
for n in range(steps + 1):
    t = n * dt
    x, _ = analytic(t)
    xe = euler.body(0).position[0]
    xv = verlet.body(0).position[0]
    if n % 20 == 0:
        print(f"{t:6.2f} {x:10.5f} {xe:10.5f} {xv:10.5f} {abs(xe - x):10.2e} {abs(xv - x):10.2e}")
    euler.step(dt)
    verlet.step(dt)
