"""Geometry module for shape primitives.

This module provides the geometric primitives placed in a scene:

Components:
    surface: The Intersectable capability shared by all primitives
    sphere: Sphere primitive with robust ray-sphere intersection
    quad: Flat parallelogram primitive (floors, walls, mirrors)
    box: Axis-aligned box primitive (solid slabs and cubes)

Every primitive answers the same queries, dispatched dynamically by the
integrator:
    distance = shape.intersect(origin, direction)   # NO_HIT when missed
    normal = shape.normal_at(point)
    u, v = shape.texture_coordinate_at(point)
    exit_point = shape.interior_exit_point(point, interior_direction)
"""

from .box import Box
from .quad import Quad
from .sphere import Sphere
from .surface import NO_HIT, Intersectable

__all__ = [
    "Intersectable",
    "NO_HIT",
    "Sphere",
    "Quad",
    "Box",
]
