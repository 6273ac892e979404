"""Capability interface shared by every intersectable primitive.

The integrator never inspects a primitive's concrete type. Anything that
provides the methods below can be placed in a Scene, so new shapes are added
by writing a class with this shape rather than by subclassing.
"""

from __future__ import annotations

import math
from typing import Protocol, runtime_checkable

from whitted.core.ray import Vec3

# Distance returned by intersect() when the ray misses
NO_HIT = math.inf


@runtime_checkable
class Intersectable(Protocol):
    """Geometry queries consumed by the ray tracing core.

    Attributes:
        material_id: Key into the owning scene's material table.
    """

    material_id: int

    def intersect(self, origin: Vec3, direction: Vec3) -> float:
        """Return the distance to the first hit along the ray, or NO_HIT.

        The distance is measured in units of ``direction``. Rays starting on
        the surface may report a hit at (nearly) zero distance; the caller
        filters those with its own epsilon.
        """
        ...

    def normal_at(self, point: Vec3) -> Vec3:
        """Return the outward surface normal at a point on the surface."""
        ...

    def texture_coordinate_at(self, point: Vec3) -> tuple[float, float]:
        """Return the (u, v) texture coordinate of a point on the surface."""
        ...

    def interior_exit_point(self, point: Vec3, interior_direction: Vec3) -> Vec3:
        """Return where a ray that entered at ``point`` leaves the object."""
        ...
