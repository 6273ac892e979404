"""Pytest configuration for ray tracer tests.

The integrator, geometry and scene code is plain Python and needs no
runtime setup. Only primary ray generation runs a Taichi kernel, so test
modules that touch the camera or the renderer opt into the Taichi fixture
with ``pytestmark = pytest.mark.usefixtures("init_taichi_session")``.
"""

import pytest

from whitted.core.ray import vec3
from whitted.materials import Material
from whitted.scene import Scene, SolidBackground


@pytest.fixture(scope="session")
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    import taichi as ti

    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture
def empty_scene():
    """A scene with no objects, black background and default ambient."""
    return Scene(ambient=(0.1, 0.1, 0.1), background=SolidBackground((0.0, 0.0, 0.0)))


@pytest.fixture
def lit_sphere_scene():
    """One opaque matte sphere at the origin lit from +z."""
    scene = Scene(ambient=(0.2, 0.2, 0.2), background=SolidBackground((0.0, 0.0, 1.0)))
    mat = scene.add_material(Material(diffuse_color=(0.8, 0.4, 0.2)))
    scene.add_sphere(center=(0.0, 0.0, 0.0), radius=1.0, material_id=mat)
    scene.add_light(position=vec3(0.0, 0.0, 10.0))
    return scene
