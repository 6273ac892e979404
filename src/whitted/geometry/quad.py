"""Quad primitive with ray-quad intersection.

This module provides a Quad primitive for flat rectangular surfaces such as
floors, walls and mirrors.

A quad is defined by:
- corner: A corner point of the quad
- edge_u: Edge vector from corner to adjacent corner
- edge_v: Edge vector from corner to other adjacent corner

The quad spans the parallelogram from corner to corner+u+v. The normal is
computed as normalize(cross(u, v)), pointing in the direction determined by
the right-hand rule. The quad is hit from both sides but always reports the
same normal, so place it with its normal toward the viewer.

Ray-quad intersection uses the parametric plane test:
1. Find where ray intersects the plane containing the quad
2. Check if the intersection point lies within the quad bounds

Example:
    >>> from whitted.geometry.quad import Quad
    >>> # Floor quad at y=0, spanning x=[0,1] and z=[0,-1], facing up
    >>> floor = Quad(corner=(0, 0, 0), edge_u=(1, 0, 0), edge_v=(0, 0, -1))
"""

from __future__ import annotations

from dataclasses import dataclass, field

from whitted.core.ray import Vec3, as_vec3, cross, dot, length

from .surface import NO_HIT


@dataclass(eq=False)
class Quad:
    """A quad (parallelogram) defined by a corner point and two edge vectors.

    The quad represents the parallelogram with vertices at:
        corner, corner+u, corner+v, corner+u+v

    Attributes:
        corner: The corner point of the quad.
        edge_u: Edge vector from corner to adjacent corner.
        edge_v: Edge vector from corner to other adjacent corner.
        material_id: The scene material assigned to the quad.
    """

    corner: Vec3
    edge_u: Vec3
    edge_v: Vec3
    material_id: int = 0
    normal: Vec3 = field(init=False, repr=False)
    _d: float = field(init=False, repr=False)
    _w_u: Vec3 = field(init=False, repr=False)
    _w_v: Vec3 = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.corner = as_vec3(self.corner)
        self.edge_u = as_vec3(self.edge_u)
        self.edge_v = as_vec3(self.edge_v)

        # Cross product gives normal direction
        n = cross(self.edge_u, self.edge_v)
        n_dot_n = dot(n, n)
        if n_dot_n <= 1e-12:
            raise ValueError("Quad edges must not be parallel or zero-length")

        self.normal = n / length(n)
        # Plane equation: dot(normal, P) = d
        self._d = dot(self.normal, self.corner)

        # w_u and w_v satisfy: dot(w_u, u) = 1, dot(w_u, v) = 0
        #                      dot(w_v, u) = 0, dot(w_v, v) = 1
        self._w_u = cross(self.edge_v, n) / n_dot_n
        self._w_v = cross(n, self.edge_u) / n_dot_n

    @property
    def area(self) -> float:
        """Magnitude of the cross product of the edge vectors."""
        return length(cross(self.edge_u, self.edge_v))

    def _local_coordinates(self, point: Vec3) -> tuple[float, float]:
        # P = corner + alpha * u + beta * v
        p_minus_q = point - self.corner
        return dot(self._w_u, p_minus_q), dot(self._w_v, p_minus_q)

    def intersect(self, origin: Vec3, direction: Vec3) -> float:
        """Return the positive ray parameter of the hit, or NO_HIT.

        Taking the dot product of the ray equation with the normal gives:
            t = (d - dot(normal, origin)) / dot(normal, direction)
        """
        denom = dot(self.normal, direction)
        if abs(denom) <= 1e-12:
            return NO_HIT

        t = (self._d - dot(self.normal, origin)) / denom
        if t <= 0.0:
            return NO_HIT

        alpha, beta = self._local_coordinates(origin + t * direction)
        if 0.0 <= alpha <= 1.0 and 0.0 <= beta <= 1.0:
            return t
        return NO_HIT

    def normal_at(self, point: Vec3) -> Vec3:
        """The plane normal; constant over the whole quad."""
        return self.normal.copy()

    def texture_coordinate_at(self, point: Vec3) -> tuple[float, float]:
        """The (alpha, beta) parametric coordinates of the point."""
        return self._local_coordinates(point)

    def interior_exit_point(self, point: Vec3, interior_direction: Vec3) -> Vec3:
        """A quad has no thickness: the ray leaves where it entered."""
        return point.copy()
