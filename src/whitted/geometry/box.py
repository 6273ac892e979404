"""Axis-aligned box primitive using the slab method.

The box is the only solid primitive besides the sphere, so it is the usual
choice for transparent slabs: a ray entering one face leaves through the
opposite side, and interior_exit_point() is simply the far slab distance.

Example:
    >>> from whitted.geometry.box import Box
    >>> slab = Box(min_corner=(-1, -1, -0.1), max_corner=(1, 1, 0.1), material_id=2)
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from whitted.core.ray import Vec3, as_vec3

from .surface import NO_HIT


@dataclass(eq=False)
class Box:
    """An axis-aligned box spanning min_corner to max_corner.

    Attributes:
        min_corner: Corner with the smallest x, y and z.
        max_corner: Corner with the largest x, y and z.
        material_id: The scene material assigned to the box.
    """

    min_corner: Vec3
    max_corner: Vec3
    material_id: int = 0

    def __post_init__(self) -> None:
        self.min_corner = as_vec3(self.min_corner)
        self.max_corner = as_vec3(self.max_corner)
        if np.any(self.max_corner - self.min_corner <= 0.0):
            raise ValueError(
                f"Box extents must be positive: min={self.min_corner.tolist()} "
                f"max={self.max_corner.tolist()}"
            )

    @property
    def center(self) -> Vec3:
        return 0.5 * (self.min_corner + self.max_corner)

    def _slabs(self, origin: Vec3, direction: Vec3) -> tuple[float, float] | None:
        """Return (t_near, t_far) of the ray's overlap with the box, if any."""
        t_near = -np.inf
        t_far = np.inf
        for axis in range(3):
            d = direction[axis]
            o = origin[axis]
            lo = self.min_corner[axis]
            hi = self.max_corner[axis]
            if abs(d) < 1e-12:
                # Parallel to this slab: must already be between the planes
                if o < lo or o > hi:
                    return None
                continue
            t1 = (lo - o) / d
            t2 = (hi - o) / d
            if t1 > t2:
                t1, t2 = t2, t1
            t_near = max(t_near, t1)
            t_far = min(t_far, t2)
            if t_near > t_far:
                return None
        return float(t_near), float(t_far)

    def intersect(self, origin: Vec3, direction: Vec3) -> float:
        """Return the nearest positive ray parameter, or NO_HIT."""
        slabs = self._slabs(origin, direction)
        if slabs is None:
            return NO_HIT
        t_near, t_far = slabs
        if t_near > 0.0:
            return t_near
        if t_far > 0.0:
            return t_far
        return NO_HIT

    def _face_axis(self, point: Vec3) -> tuple[int, float]:
        """Return (axis, sign) of the face closest to the point."""
        to_min = np.abs(point - self.min_corner)
        to_max = np.abs(point - self.max_corner)
        axis_min = int(np.argmin(to_min))
        axis_max = int(np.argmin(to_max))
        if to_min[axis_min] < to_max[axis_max]:
            return axis_min, -1.0
        return axis_max, 1.0

    def normal_at(self, point: Vec3) -> Vec3:
        """Outward unit normal of the face nearest to the point."""
        axis, sign = self._face_axis(point)
        normal = np.zeros(3, dtype=np.float64)
        normal[axis] = sign
        return normal

    def texture_coordinate_at(self, point: Vec3) -> tuple[float, float]:
        """Planar coordinates across the face, normalized to [0, 1]."""
        axis, _ = self._face_axis(point)
        u_axis, v_axis = [a for a in range(3) if a != axis]
        extent = self.max_corner - self.min_corner
        local = (point - self.min_corner) / extent
        return float(local[u_axis]), float(local[v_axis])

    def interior_exit_point(self, point: Vec3, interior_direction: Vec3) -> Vec3:
        """Point where the interior ray crosses the far slab."""
        slabs = self._slabs(point, interior_direction)
        if slabs is None:
            return point.copy()
        return point + max(slabs[1], 0.0) * interior_direction
