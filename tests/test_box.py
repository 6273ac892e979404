"""Unit tests for axis-aligned boxes.

Tests cover:
- Slab intersection from outside, inside and parallel to a face
- Face normals and per-face texture coordinates
- Interior exit points used for refraction
"""

import numpy as np
import pytest

from whitted.core.ray import vec3
from whitted.geometry import NO_HIT, Box, Intersectable


def unit_cube():
    return Box(min_corner=(-1, -1, -1), max_corner=(1, 1, 1))


class TestBoxBasics:
    """Tests for Box construction."""

    def test_center(self):
        box = Box(min_corner=(0, 0, 0), max_corner=(2, 4, 6))
        assert np.allclose(box.center, [1.0, 2.0, 3.0])

    @pytest.mark.parametrize("max_corner", [(1, 1, -2), (0, 1, 1), (1, -2, 1)])
    def test_non_positive_extent_rejected(self, max_corner):
        """Every extent must be positive."""
        with pytest.raises(ValueError):
            Box(min_corner=(0, 0, -2), max_corner=max_corner)

    def test_satisfies_intersectable(self):
        assert isinstance(unit_cube(), Intersectable)


class TestBoxIntersection:
    """Tests for ray-box intersection."""

    def test_hit_from_outside(self):
        """Nearest face is reported."""
        t = unit_cube().intersect(vec3(0.0, 0.0, 5.0), vec3(0.0, 0.0, -1.0))
        assert t == pytest.approx(4.0)

    def test_hit_from_inside(self):
        """Inside the box the far face is reported."""
        t = unit_cube().intersect(vec3(0.0, 0.0, 0.0), vec3(1.0, 0.0, 0.0))
        assert t == pytest.approx(1.0)

    def test_miss(self):
        t = unit_cube().intersect(vec3(3.0, 0.0, 5.0), vec3(0.0, 0.0, -1.0))
        assert t == NO_HIT

    def test_parallel_outside_slab(self):
        """A ray parallel to a slab and outside it misses."""
        t = unit_cube().intersect(vec3(0.0, 2.0, 5.0), vec3(0.0, 0.0, -1.0))
        assert t == NO_HIT

    def test_box_behind_ray(self):
        t = unit_cube().intersect(vec3(0.0, 0.0, 5.0), vec3(0.0, 0.0, 1.0))
        assert t == NO_HIT

    def test_oblique_hit(self):
        """Diagonal rays enter through the first slab crossed last."""
        t = unit_cube().intersect(vec3(3.0, 3.0, 0.0), vec3(-1.0, -1.0, 0.0))
        assert t == pytest.approx(2.0)


class TestBoxSurface:
    """Tests for normals, texture coordinates and exit points."""

    @pytest.mark.parametrize(
        "point,expected",
        [
            ((1.0, 0.2, 0.3), (1.0, 0.0, 0.0)),
            ((-1.0, 0.2, 0.3), (-1.0, 0.0, 0.0)),
            ((0.1, 1.0, -0.5), (0.0, 1.0, 0.0)),
            ((0.1, -0.4, -1.0), (0.0, 0.0, -1.0)),
        ],
    )
    def test_face_normals(self, point, expected):
        normal = unit_cube().normal_at(vec3(*point))
        assert np.allclose(normal, expected)

    def test_texture_coordinates(self):
        """Coordinates are the two in-face axes normalized to [0, 1]."""
        box = Box(min_corner=(0, 0, 0), max_corner=(2, 2, 2))
        u, v = box.texture_coordinate_at(vec3(0.5, 1.5, 2.0))
        assert u == pytest.approx(0.25)
        assert v == pytest.approx(0.75)

    def test_interior_exit_point(self):
        """A ray entering the front face leaves through the back face."""
        exit_point = unit_cube().interior_exit_point(vec3(0.2, 0.1, 1.0), vec3(0.0, 0.0, -1.0))
        assert np.allclose(exit_point, [0.2, 0.1, -1.0])

    def test_interior_exit_point_oblique(self):
        """An oblique interior ray can leave through a side face."""
        exit_point = unit_cube().interior_exit_point(vec3(0.5, 0.0, 1.0), vec3(1.0, 0.0, -1.0))
        assert np.allclose(exit_point, [1.0, 0.0, 0.5])
