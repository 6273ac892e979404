"""Unit tests for quad primitives.

Tests cover:
- Quad construction and normal computation
- Ray-quad intersection (hit, miss, parallel, behind)
- Two-sided hits with a constant normal
- Parametric texture coordinates
"""

import numpy as np
import pytest

from whitted.core.ray import vec3
from whitted.geometry import NO_HIT, Intersectable, Quad


def unit_floor():
    """Floor quad at y=0 spanning x=[0,1], z=[0,-1], normal +y."""
    return Quad(corner=(0, 0, 0), edge_u=(1, 0, 0), edge_v=(0, 0, -1))


class TestQuadBasics:
    """Tests for Quad construction."""

    def test_normal_right_hand_rule(self):
        """The normal is normalize(u x v)."""
        quad = Quad(corner=(0, 0, 0), edge_u=(2, 0, 0), edge_v=(0, 3, 0))
        assert np.allclose(quad.normal, [0.0, 0.0, 1.0])
        assert unit_floor().normal[1] == pytest.approx(1.0)

    def test_area(self):
        """Area is |u x v|."""
        quad = Quad(corner=(0, 0, 0), edge_u=(2, 0, 0), edge_v=(0, 3, 0))
        assert quad.area == pytest.approx(6.0)

    def test_parallel_edges_rejected(self):
        """Degenerate quads are an error."""
        with pytest.raises(ValueError):
            Quad(corner=(0, 0, 0), edge_u=(1, 0, 0), edge_v=(2, 0, 0))

    def test_satisfies_intersectable(self):
        """Quad provides every geometry query."""
        assert isinstance(unit_floor(), Intersectable)


class TestQuadIntersection:
    """Tests for ray-quad intersection."""

    def test_hit_from_above(self):
        """A downward ray through the middle hits."""
        t = unit_floor().intersect(vec3(0.5, 2.0, -0.5), vec3(0.0, -1.0, 0.0))
        assert t == pytest.approx(2.0)

    def test_hit_from_below(self):
        """Quads are two-sided."""
        t = unit_floor().intersect(vec3(0.5, -3.0, -0.5), vec3(0.0, 1.0, 0.0))
        assert t == pytest.approx(3.0)

    def test_miss_outside_bounds(self):
        """Hitting the plane outside the parallelogram misses."""
        t = unit_floor().intersect(vec3(1.5, 2.0, -0.5), vec3(0.0, -1.0, 0.0))
        assert t == NO_HIT

    def test_parallel_ray(self):
        """A ray in the plane direction never hits."""
        t = unit_floor().intersect(vec3(0.5, 1.0, 0.5), vec3(0.0, 0.0, -1.0))
        assert t == NO_HIT

    def test_plane_behind_ray(self):
        """The plane behind the origin is not hit."""
        t = unit_floor().intersect(vec3(0.5, 2.0, -0.5), vec3(0.0, 1.0, 0.0))
        assert t == NO_HIT

    def test_ray_starting_on_plane(self):
        """A ray leaving the surface does not hit it again."""
        t = unit_floor().intersect(vec3(0.5, 0.0, -0.5), vec3(0.0, 1.0, 0.0))
        assert t == NO_HIT

    def test_edges_inclusive(self):
        """Points on the boundary count as hits."""
        t = unit_floor().intersect(vec3(1.0, 1.0, 0.0), vec3(0.0, -1.0, 0.0))
        assert t == pytest.approx(1.0)


class TestQuadSurface:
    """Tests for normal, texture coordinates and exit point."""

    def test_normal_is_constant_copy(self):
        """normal_at returns the plane normal without aliasing it."""
        quad = unit_floor()
        normal = quad.normal_at(vec3(0.2, 0.0, -0.7))
        normal[0] = 5.0
        assert np.allclose(quad.normal, [0.0, 1.0, 0.0])

    def test_texture_coordinates(self):
        """(alpha, beta) follow the edge vectors."""
        quad = Quad(corner=(0, 0, 0), edge_u=(2, 0, 0), edge_v=(0, 4, 0))
        u, v = quad.texture_coordinate_at(vec3(0.5, 3.0, 0.0))
        assert u == pytest.approx(0.25)
        assert v == pytest.approx(0.75)

    def test_interior_exit_point_is_entry(self):
        """A flat quad has no interior."""
        point = vec3(0.3, 0.0, -0.3)
        exit_point = unit_floor().interior_exit_point(point, vec3(0.0, -1.0, 0.0))
        assert np.allclose(exit_point, point)
        assert exit_point is not point
