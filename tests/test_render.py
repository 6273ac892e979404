"""Tests for the image renderer.

This module tests the per-pixel driver:
- Every pixel equals trace_ray() of its primary ray
- Row-by-row progress reporting (callback and generator)
- Sanitizing non-finite colors
- Output conversions and the aspect-ratio warning
"""

import logging

import numpy as np
import pytest

pytestmark = pytest.mark.usefixtures("init_taichi_session")


def small_scene():
    from whitted.camera.pinhole import PinholeCamera
    from whitted.materials import Material
    from whitted.scene import Scene, SolidBackground

    scene = Scene(ambient=(0.1, 0.1, 0.1), background=SolidBackground((0.0, 0.0, 0.5)))
    mat = scene.add_material(Material(diffuse_color=(0.8, 0.2, 0.2)))
    scene.add_sphere((0.0, 0.0, 0.0), 1.0, mat)
    scene.add_light((2.0, 4.0, 4.0))
    camera = PinholeCamera(
        lookfrom=(0.0, 0.0, 4.0),
        lookat=(0.0, 0.0, 0.0),
        vup=(0.0, 1.0, 0.0),
        vfov=40.0,
        aspect_ratio=4.0 / 3.0,
    )
    return scene, camera


class TestRenderer:
    """Test whole-image rendering."""

    def test_invalid_dimensions(self):
        from whitted.core.render import Renderer

        with pytest.raises(ValueError):
            Renderer(0, 10)

    def test_objects_without_materials(self):
        """A scene whose material table was emptied cannot be rendered."""
        from whitted.core.render import Renderer

        scene, camera = small_scene()
        scene.materials.clear()

        with pytest.raises(RuntimeError, match="no materials"):
            Renderer(4, 3).render(scene, camera)

    def test_pixels_match_trace_ray(self):
        from whitted.camera.pinhole import generate_primary_rays
        from whitted.core.integrator import trace_ray
        from whitted.core.render import Renderer

        scene, camera = small_scene()
        renderer = Renderer(8, 6)
        image = renderer.render(scene, camera)

        origin, directions = generate_primary_rays(camera, 8, 6)
        assert image.shape == (6, 8, 3)
        for j, i in [(0, 0), (3, 4), (5, 7)]:
            assert np.allclose(image[j, i], trace_ray(scene, origin, directions[j, i]))

    def test_center_hits_sphere_corner_sees_background(self):
        from whitted.core.render import Renderer

        scene, camera = small_scene()
        image = Renderer(8, 6).render(scene, camera)

        assert np.allclose(image[0, 0], [0.0, 0.0, 0.5])
        assert image[3, 4, 0] > image[3, 4, 2]

    def test_progress_callback_per_row(self):
        from whitted.core.render import Renderer

        scene, camera = small_scene()
        renderer = Renderer(4, 3)
        calls = []

        renderer.render(scene, camera, callback=lambda done, total: calls.append((done, total)))

        assert calls == [(1, 3), (2, 3), (3, 3)]
        assert renderer.is_complete

    def test_render_rows_can_stop_early(self):
        from whitted.core.render import Renderer

        scene, camera = small_scene()
        renderer = Renderer(4, 3)
        rows = renderer.render_rows(scene, camera)

        assert next(rows) == (1, 3)
        assert not renderer.is_complete

    def test_reset(self):
        from whitted.core.render import Renderer

        scene, camera = small_scene()
        renderer = Renderer(4, 3)
        renderer.render(scene, camera)
        renderer.reset()

        assert not renderer.is_complete
        assert np.allclose(renderer.get_linear_image(), 0.0)

    def test_custom_settings_used(self):
        from whitted.core.integrator import TraceSettings
        from whitted.core.render import Renderer

        scene, camera = small_scene()
        image = Renderer(4, 3, TraceSettings(max_depth=0)).render(scene, camera)
        assert np.allclose(image, 0.0)

    def test_aspect_mismatch_warns(self, caplog):
        from whitted.core.render import Renderer

        scene, camera = small_scene()
        with caplog.at_level(logging.WARNING, logger="whitted.core.render"):
            Renderer(4, 4).render(scene, camera)
        assert "aspect ratio" in caplog.text


class TestRendererOutput:
    """Test sanitizing and image conversions."""

    def test_sanitize_replaces_non_finite(self):
        from whitted.core.render import Renderer

        renderer = Renderer(2, 2)
        renderer._image[0, 0] = [np.nan, np.inf, 0.5]

        assert renderer.sanitize() == 2
        assert np.allclose(renderer.get_linear_image()[0, 0], [0.0, 0.0, 0.5])

    def test_linear_image_is_copy(self):
        from whitted.core.render import Renderer

        renderer = Renderer(2, 2)
        image = renderer.get_linear_image()
        image[:] = 7.0
        assert np.allclose(renderer.get_linear_image(), 0.0)

    def test_image_conversions_clamp(self):
        from whitted.core.render import Renderer

        renderer = Renderer(2, 1)
        renderer._image[0, 0] = [2.0, -1.0, 0.25]

        linear = renderer.get_image_numpy()
        assert linear.dtype == np.float32
        assert np.allclose(linear[0, 0], [1.0, 0.0, 0.25])

        encoded = renderer.get_image_uint8(gamma=2.0)
        assert encoded.dtype == np.uint8
        assert tuple(encoded[0, 0]) == (255, 0, 127)

    def test_repr(self):
        from whitted.core.render import Renderer

        assert repr(Renderer(3, 2)) == "Renderer(width=3, height=2, rows_done=0)"
