# MIT License (see LICENSE)
"""
Vector helpers for the particle engine.

Vectors are numpy float64 arrays of shape (3,). Every value produced here is
read-only, so a vector handed out by a Body can never be used to rewrite the
body's history behind its back. Arithmetic between vectors (``a + b``,
``2.0 * a``) is plain numpy and yields fresh arrays.
"""
from __future__ import annotations

import numpy as np


def _frozen(a: np.ndarray) -> np.ndarray:
    a.flags.writeable = False
    return a


def as_vector(values) -> np.ndarray:
    """
    Convert any 3-element array-like to a read-only float64 vector.

    Always copies, so freezing the result never affects the caller's array.
    """
    v = np.array(values, dtype=np.float64)
    if v.shape != (3,):
        raise ValueError(f"expected a 3-element vector, got shape {v.shape}")
    return _frozen(v)


def vec(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> np.ndarray:
    """Build a vector from its Cartesian components."""
    return _frozen(np.array((x, y, z), dtype=np.float64))


ZERO = vec()
UNIT_X = vec(1.0, 0.0, 0.0)
UNIT_Y = vec(0.0, 1.0, 0.0)
UNIT_Z = vec(0.0, 0.0, 1.0)


def dot(a: np.ndarray, b: np.ndarray) -> float:
    return float(np.dot(a, b))


def norm2(v: np.ndarray) -> float:
    """Squared magnitude. Avoids sqrt."""
    return float(np.dot(v, v))


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a vector."""
    return float(np.sqrt(norm2(v)))


def equal(a: np.ndarray, b: np.ndarray) -> bool:
    """Exact component-wise equality, no tolerance."""
    return bool(np.array_equal(a, b))


def unit(v: np.ndarray) -> np.ndarray:
    """
    Unit vector in the direction of v.

    The zero vector is its own unit vector: it is returned unchanged instead
    of being divided by a zero norm. Spring forces between coincident bodies
    therefore vanish rather than turning into NaN.
    """
    if not np.any(v):
        return as_vector(v)
    return _frozen(v / norm(v))


def unit_and_norm(v: np.ndarray) -> tuple[np.ndarray, float]:
    """Unit vector and norm in one call."""
    return unit(v), norm(v)


def cross(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return _frozen(np.cross(a, b))


def projection_rejection(a: np.ndarray, wrt: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """
    Split a into the parts parallel and orthogonal to wrt.

    Projection onto the zero vector is zero, so the rejection is a itself.
    """
    u = unit(wrt)
    prj = _frozen(u * dot(a, u))
    rej = _frozen(a - prj)
    return prj, rej


def projection(a: np.ndarray, onto: np.ndarray) -> np.ndarray:
    """Component of a parallel to onto."""
    return projection_rejection(a, onto)[0]


def rejection(a: np.ndarray, of: np.ndarray) -> np.ndarray:
    """Component of a orthogonal to of."""
    return projection_rejection(a, of)[1]
