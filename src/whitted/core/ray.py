"""Vector utilities for recursive ray tracing.

This module provides the small set of vector helpers the Whitted
integrator needs. A ray is passed around as an (origin, direction) pair.
Vectors and colors are plain NumPy float64 arrays of shape (3,), so every
arithmetic operation yields a new array and no value is ever aliased
between calls.

Example:
    >>> origin = vec3(0.0, 0.0, 0.0)
    >>> direction = vec3(0.0, 0.0, -1.0)
    >>> point = origin + 5.0 * direction  # Point 5 units along the ray
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

# Type alias for 3D vectors and RGB colors
Vec3 = npt.NDArray[np.float64]
Color = Vec3


def vec3(x: float, y: float, z: float) -> Vec3:
    """Create a 3D vector (or RGB color) from its components."""
    return np.array([x, y, z], dtype=np.float64)


def as_vec3(value: Sequence[float] | Vec3) -> Vec3:
    """Convert a tuple, list or array to a float64 vector.

    Always returns a fresh array, so callers may keep the result without
    worrying about later mutation of the input.

    Raises:
        ValueError: If the value does not have exactly three components.
    """
    result = np.array(value, dtype=np.float64).reshape(-1)
    if result.shape != (3,):
        raise ValueError(f"Expected 3 components, got {len(result)}: {value!r}")
    return result


def black() -> Color:
    """Return a new black color."""
    return np.zeros(3, dtype=np.float64)


# =============================================================================
# Vector Utility Functions
# =============================================================================


def length(v: Vec3) -> float:
    """Compute the Euclidean length of a vector."""
    return math.sqrt(float(np.dot(v, v)))


def normalize(v: Vec3) -> Vec3:
    """Normalize a vector to unit length.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.
        If v is zero-length, returns a zero vector.
    """
    n = length(v)
    if n == 0.0:
        return np.zeros(3, dtype=np.float64)
    return v / n


def dot(a: Vec3, b: Vec3) -> float:
    """Compute the dot product of two vectors."""
    return float(np.dot(a, b))


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Compute the cross product of two vectors."""
    return np.cross(a, b)


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Reflect an incident vector about a normal.

    The normal should be unit length for correct results.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal.

    Returns:
        The reflected direction vector (pointing away from the surface).
    """
    return incident - 2.0 * dot(incident, normal) * normal


def snell(incident: Vec3, normal: Vec3, n1: float, n2: float) -> Vec3:
    """Refract a direction crossing from a medium of index n1 into n2.

    The normal may face either side of the interface; it is flipped to
    oppose the incident direction before applying Snell's law. When the
    angle exceeds the critical angle the ray is totally internally
    reflected and the mirror direction is returned instead.

    Args:
        incident: The incoming direction (need not be normalized).
        normal: The surface normal at the crossing point.
        n1: Refraction index of the medium the ray travels in.
        n2: Refraction index of the medium the ray enters.

    Returns:
        The unit transmitted (or totally reflected) direction.
    """
    i = normalize(incident)
    n = normalize(normal)
    cos_i = -dot(i, n)
    if cos_i < 0.0:
        n = -n
        cos_i = -cos_i

    eta = n1 / n2
    sin2_t = eta * eta * (1.0 - cos_i * cos_i)
    if sin2_t > 1.0:
        return reflect(i, n)

    cos_t = math.sqrt(1.0 - sin2_t)
    return eta * i + (eta * cos_i - cos_t) * n
