# MIT License (see LICENSE)
"""
Force laws for particle simulation.

A force here is a pure function of the whole system state: ``accel(bodies, i)``
returns the acceleration felt by body i, computed from the current positions
and velocities of all bodies. It must never modify a body; the System relies
on that to evaluate every body against the same pre-step state.

Key concepts:
- Forces compose: ``combine(f, g)`` (or ``f + g``) sums their accelerations.
  Sums are kept flat, combining a sum with another force never nests it.
- ``masked(f, *indices)`` exempts some bodies (anchors, pinned particles)
  from a force. The wrapped force is not even evaluated for them.
- Hooke is an N x N spring network. It is O(N) per body, O(N^2) per step.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np

from ..body import Body
from ..vector import ZERO, as_vector, norm, unit_and_norm


def check_index(i: int, n: int) -> int:
    """Return i if it names one of n bodies, else raise IndexError (no wrap-around)."""
    if not 0 <= i < n:
        raise IndexError(f"body index {i} out of range for {n} bodies")
    return i


class Force(ABC):
    """Base class for everything that produces an acceleration."""

    @abstractmethod
    def accel(self, bodies: Sequence[Body], i: int) -> np.ndarray:
        """Acceleration of ``bodies[i]``. Must not mutate any body."""

    def __add__(self, other: Force) -> SumForce:
        if not isinstance(other, Force):
            return NotImplemented
        return combine(self, other)


class SumForce(Force):
    """
    An ordered, flat collection of forces whose accelerations add up.

    Members are summed in order. The result is mathematically independent of
    that order, but floating-point rounding is not.
    """

    def __init__(self, forces: Iterable[Force] = ()) -> None:
        self._forces: tuple[Force, ...] = tuple(forces)
        for f in self._forces:
            if not isinstance(f, Force):
                raise TypeError(f"not a Force: {f!r}")

    def __repr__(self) -> str:
        return f"SumForce({list(self._forces)!r})"

    def __len__(self) -> int:
        return len(self._forces)

    def __iter__(self):
        return iter(self._forces)

    @property
    def forces(self) -> tuple[Force, ...]:
        return self._forces

    def accel(self, bodies: Sequence[Body], i: int) -> np.ndarray:
        check_index(i, len(bodies))
        a = np.zeros(3, dtype=np.float64)
        for f in self._forces:
            a += f.accel(bodies, i)
        return a


def combine(*forces: Force) -> SumForce:
    """
    Sum several forces into one.

    Arguments that are already SumForce instances contribute their members
    instead of themselves, so the result is always a single flat list.
    """
    members: list[Force] = []
    for f in forces:
        if isinstance(f, SumForce):
            members.extend(f.forces)
        elif isinstance(f, Force):
            members.append(f)
        else:
            raise TypeError(f"not a Force: {f!r}")
    return SumForce(members)


class MaskedForce(Force):
    """
    A force that does not act on some bodies.

    For an excluded index the zero vector is returned and the wrapped force
    is never called.
    """

    def __init__(self, force: Force, excluded: Iterable[int]) -> None:
        if not isinstance(force, Force):
            raise TypeError(f"not a Force: {force!r}")
        self.force = force
        self.excluded: frozenset[int] = frozenset(int(i) for i in excluded)

    def __repr__(self) -> str:
        return f"MaskedForce({self.force!r}, excluded={sorted(self.excluded)})"

    def accel(self, bodies: Sequence[Body], i: int) -> np.ndarray:
        check_index(i, len(bodies))
        if i in self.excluded:
            return ZERO
        return self.force.accel(bodies, i)


def masked(force: Force, *excluded: int) -> MaskedForce:
    """Wrap force so that it skips the bodies with the given indices."""
    return MaskedForce(force, excluded)


@dataclass(frozen=True)
class Spring:
    """
    One directed spring of a Hooke network.

    Attributes:
        k: Spring constant. Zero means "no spring".
        l0: Rest length.
    """
    k: float = 0.0
    l0: float = 0.0


class Hooke(Force):
    """
    Pairwise Hooke spring network.

    ``springs[i][j]`` is the spring pulling body i towards body j. For body i
    the acceleration is

        a_i = (1/m_i) * sum_j  k_ij * (|x_j - x_i| - l0_ij) * unit(x_j - x_i)

    The diagonal should hold zero springs. The table need not be symmetric,
    but physical setups keep ``springs[i][j] == springs[j][i]``.

    Coincident bodies have a zero separation whose unit vector is the zero
    vector, so such a pair contributes nothing instead of dividing by zero.
    """

    def __init__(self, springs: Sequence[Sequence[Spring]]) -> None:
        n = len(springs)
        rows = [list(row) for row in springs]
        for row in rows:
            if len(row) != n:
                raise ValueError(f"spring table must be square, got a row of {len(row)} in a {n}-row table")
        self._k = np.zeros((n, n), dtype=np.float64)
        self._l0 = np.zeros((n, n), dtype=np.float64)
        for i, row in enumerate(rows):
            for j, s in enumerate(row):
                self._k[i, j], self._l0[i, j] = s.k, s.l0

    @classmethod
    def empty(cls, n: int) -> Hooke:
        """A network of n bodies without any springs."""
        return cls([[Spring()] * n for _ in range(n)])

    @classmethod
    def from_arrays(cls, k, l0) -> Hooke:
        """Build from N x N arrays of spring constants and rest lengths."""
        k = np.asarray(k, dtype=np.float64)
        l0 = np.asarray(l0, dtype=np.float64)
        if k.ndim != 2 or k.shape[0] != k.shape[1] or k.shape != l0.shape:
            raise ValueError(f"k and l0 must be matching square tables, got {k.shape} and {l0.shape}")
        n = k.shape[0]
        return cls([[Spring(float(k[i, j]), float(l0[i, j])) for j in range(n)] for i in range(n)])

    def __repr__(self) -> str:
        return f"Hooke(n={self.size}, springs={self.n_springs})"

    @property
    def size(self) -> int:
        return self._k.shape[0]

    @property
    def n_springs(self) -> int:
        """Number of non-zero directed springs."""
        return int(np.count_nonzero(self._k))

    def spring(self, i: int, j: int) -> Spring:
        check_index(i, self.size)
        check_index(j, self.size)
        return Spring(float(self._k[i, j]), float(self._l0[i, j]))

    def connect(self, i: int, j: int, k: float, l0: float, symmetric: bool = True) -> None:
        """Set the spring from i to j (and from j to i unless symmetric=False)."""
        check_index(i, self.size)
        check_index(j, self.size)
        if i == j:
            raise ValueError(f"cannot attach a spring from body {i} to itself")
        self._k[i, j], self._l0[i, j] = k, l0
        if symmetric:
            self._k[j, i], self._l0[j, i] = k, l0

    def _check_size(self, bodies: Sequence[Body]) -> None:
        if len(bodies) != self.size:
            raise IndexError(f"spring network has {self.size} bodies, system has {len(bodies)}")

    def accel(self, bodies: Sequence[Body], i: int) -> np.ndarray:
        self._check_size(bodies)
        check_index(i, self.size)
        b = bodies[i]
        x_i = b.position
        f = np.zeros(3, dtype=np.float64)
        for j, other in enumerate(bodies):
            k = self._k[i, j]
            if k == 0.0:
                continue
            direction, length = unit_and_norm(other.position - x_i)
            f += direction * (k * (length - self._l0[i, j]))
        return f / b.mass

    def potential_energy(self, bodies: Sequence[Body], lag: int = 0) -> float:
        """
        Elastic energy stored in the network, U = sum 1/2 k (d - l0)^2.

        Every ordered pair is counted with half weight, so a symmetric spring
        (present as i->j and j->i) is counted exactly once. Positions are
        taken from ``before(lag)``.
        """
        self._check_size(bodies)
        xs = [b.before(lag)[0] for b in bodies]
        u = 0.0
        for i, xi in enumerate(xs):
            for j, xj in enumerate(xs):
                k = self._k[i, j]
                if k == 0.0:
                    continue
                stretch = norm(xj - xi) - self._l0[i, j]
                u += 0.25 * k * stretch * stretch
        return u


class HarmonicWell(Force):
    """
    A single spring tying every body to a fixed point.

    Implements a = -k (x - center) / m, the simple harmonic oscillator with
    angular frequency sqrt(k/m).
    """

    def __init__(self, k: float, center=ZERO) -> None:
        self.k = float(k)
        self.center = as_vector(center)

    def __repr__(self) -> str:
        return f"HarmonicWell(k={self.k}, center={self.center.tolist()})"

    def accel(self, bodies: Sequence[Body], i: int) -> np.ndarray:
        b = bodies[check_index(i, len(bodies))]
        return (b.position - self.center) * (-self.k / b.mass)

    def potential_energy(self, bodies: Sequence[Body], lag: int = 0) -> float:
        u = 0.0
        for b in bodies:
            d = b.before(lag)[0] - self.center
            u += 0.5 * self.k * float(np.dot(d, d))
        return u


class UniformField(Force):
    """Constant acceleration g acting on every body (e.g. gravity near a surface)."""

    def __init__(self, g) -> None:
        self.g = as_vector(g)

    def __repr__(self) -> str:
        return f"UniformField(g={self.g.tolist()})"

    def accel(self, bodies: Sequence[Body], i: int) -> np.ndarray:
        check_index(i, len(bodies))
        return self.g


class ConstantForce(Force):
    """
    The same force F on every body, so a = F / m.

    Unlike UniformField, heavier bodies accelerate less.
    """

    def __init__(self, f) -> None:
        self.f = as_vector(f)

    def __repr__(self) -> str:
        return f"ConstantForce(f={self.f.tolist()})"

    def accel(self, bodies: Sequence[Body], i: int) -> np.ndarray:
        b = bodies[check_index(i, len(bodies))]
        return self.f / b.mass
