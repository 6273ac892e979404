"""Sphere primitive with robust ray-sphere intersection.

This module provides a Sphere primitive using the robust quadratic formula
from Ray Tracing Gems to avoid floating-point artifacts.

The robust quadratic formula avoids catastrophic cancellation when b^2 is
nearly equal to 4ac by using a reformulated calculation that maintains
numerical stability. This matters here because secondary rays start exactly
on the sphere surface, where one root is (almost) zero.

Example:
    >>> from whitted.core.ray import vec3
    >>> from whitted.geometry.sphere import Sphere
    >>> sphere = Sphere(center=(0.0, 0.0, -1.0), radius=0.5, material_id=0)
    >>> sphere.intersect(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0))
    0.5
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from whitted.core.ray import Vec3, as_vec3, dot

from .surface import NO_HIT

# Distances this close to zero (times the radius) are the ray's own origin
SURFACE_TOLERANCE = 1e-9


def _solve_quadratic_robust(h: float, a: float, c: float, sqrt_d: float) -> tuple[float, float]:
    """Solve a*t^2 + 2*h*t + c = 0 using a numerically stable method.

    Args:
        h: Half of the linear coefficient.
        a: Quadratic coefficient.
        c: Constant term.
        sqrt_d: Square root of discriminant (h^2 - a*c).

    Returns:
        Tuple of (t0, t1) where t0 <= t1.
    """
    # q = -(h + sign(h) * sqrt(discriminant))
    sign_h = -1.0 if h < 0.0 else 1.0
    q = -(h + sign_h * sqrt_d)

    if abs(q) < 1e-12:
        # Tangent ray through the origin of the formula; fall back
        t0 = (-h - sqrt_d) / a
        t1 = (-h + sqrt_d) / a
    else:
        t0 = q / a
        t1 = c / q

    if t0 > t1:
        t0, t1 = t1, t0
    return t0, t1


@dataclass(eq=False)
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive float).
        material_id: The scene material assigned to the sphere.
    """

    center: Vec3
    radius: float
    material_id: int = 0

    def __post_init__(self) -> None:
        self.center = as_vec3(self.center)
        self.radius = float(self.radius)
        if self.radius <= 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")

    def _roots(self, origin: Vec3, direction: Vec3) -> tuple[float, float] | None:
        """Return both ray parameters where the ray meets the sphere.

        The ray-sphere intersection is found by solving:
            |origin + t * direction - center|^2 = radius^2

        which expands to a*t^2 + 2*h*t + c = 0 with:
            a = dot(direction, direction)
            h = dot(direction, oc)
            c = dot(oc, oc) - radius^2
            oc = origin - center
        """
        oc = origin - self.center
        a = dot(direction, direction)
        if a == 0.0:
            return None
        h = dot(direction, oc)
        c = dot(oc, oc) - self.radius * self.radius

        discriminant = h * h - a * c
        if discriminant < 0.0:
            return None
        return _solve_quadratic_robust(h, a, c, math.sqrt(discriminant))

    def intersect(self, origin: Vec3, direction: Vec3) -> float:
        """Return the nearest positive ray parameter, or NO_HIT.

        A root within SURFACE_TOLERANCE (relative to the radius) of the
        origin is the surface the ray starts on. It is skipped so a ray
        leaving the surface inward reports the far wall.
        """
        roots = self._roots(origin, direction)
        if roots is None:
            return NO_HIT
        t0, t1 = roots
        # Roots are in units of direction; convert the tolerance to match
        scale = max(1.0, self.radius) / math.sqrt(dot(direction, direction))
        tolerance = SURFACE_TOLERANCE * scale
        if t0 > tolerance:
            return t0
        if t1 > tolerance:
            return t1
        return NO_HIT

    def normal_at(self, point: Vec3) -> Vec3:
        """Outward unit normal: points from center to the surface point."""
        return (point - self.center) / self.radius

    def texture_coordinate_at(self, point: Vec3) -> tuple[float, float]:
        """Spherical (longitude, latitude) coordinates in [0, 1]."""
        d = (point - self.center) / self.radius
        u = 0.5 + math.atan2(d[2], d[0]) / (2.0 * math.pi)
        v = 0.5 - math.asin(max(-1.0, min(1.0, d[1]))) / math.pi
        return u, v

    def interior_exit_point(self, point: Vec3, interior_direction: Vec3) -> Vec3:
        """Far intersection of the interior ray with the sphere.

        The entry point lies on the surface, so the near root is (about)
        zero and the far root is the chord length.
        """
        roots = self._roots(point, interior_direction)
        if roots is None:
            return point.copy()
        return point + max(roots[1], 0.0) * interior_direction
