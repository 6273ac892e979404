"""Tests for materials and textures.

This module tests:
- Material validation and property conversion
- Diffuse lookup with and without a texture
- Material presets (matte, plastic, mirror, glass)
- Checkerboard and bitmap textures, including loading through Pillow
"""

import numpy as np
import pytest
from PIL import Image as PILImage

from whitted.materials import (
    CheckerTexture,
    ImageTexture,
    Material,
    Shadable,
    Texture,
    glass,
    matte,
    mirror,
    plastic,
)


class TestMaterial:
    """Test the Phong material."""

    def test_defaults(self):
        """A bare material is opaque, dull and non-reflective."""
        mat = Material(diffuse_color=(0.5, 0.25, 0.125))
        assert np.allclose(mat.specular, [0.0, 0.0, 0.0])
        assert mat.specular_exponent == 1.0
        assert mat.reflection_factor == 0.0
        assert mat.refraction_index == 1.0
        assert mat.opacity == 1.0
        assert mat.texture is None

    def test_satisfies_shadable(self):
        assert isinstance(Material(diffuse_color=(1, 1, 1)), Shadable)

    def test_diffuse_without_texture_is_copy(self):
        """Callers may modify the returned color freely."""
        mat = Material(diffuse_color=(0.5, 0.5, 0.5))
        color = mat.diffuse((0.3, 0.3))
        color[0] = 9.0
        assert np.allclose(mat.diffuse_color, [0.5, 0.5, 0.5])

    def test_diffuse_uses_texture(self):
        checker = CheckerTexture((1, 0, 0), (0, 0, 1), squares=2)
        mat = Material(diffuse_color=(0.5, 0.5, 0.5), texture=checker)
        assert np.allclose(mat.diffuse((0.1, 0.1)), [1.0, 0.0, 0.0])
        assert np.allclose(mat.diffuse((0.6, 0.1)), [0.0, 0.0, 1.0])

    def test_negative_exponent_rejected(self):
        with pytest.raises(ValueError):
            Material(diffuse_color=(1, 1, 1), specular_exponent=-1.0)

    def test_non_positive_refraction_index_rejected(self):
        with pytest.raises(ValueError):
            Material(diffuse_color=(1, 1, 1), refraction_index=0.0)

    def test_out_of_range_opacity_kept(self):
        """Opacity and reflection factor are used as given."""
        mat = Material(diffuse_color=(1, 1, 1), opacity=1.5, reflection_factor=-0.2)
        assert mat.opacity == 1.5
        assert mat.reflection_factor == -0.2


class TestPresets:
    """Test the material presets."""

    def test_matte(self):
        mat = matte((0.2, 0.4, 0.6))
        assert np.allclose(mat.diffuse_color, [0.2, 0.4, 0.6])
        assert np.allclose(mat.specular, 0.0)

    def test_plastic_has_highlight(self):
        mat = plastic((0.7, 0.1, 0.1))
        assert np.all(mat.specular > 0.0)
        assert mat.specular_exponent == 32.0
        assert mat.reflection_factor == 0.0

    def test_mirror_reflects(self):
        mat = mirror()
        assert mat.reflection_factor == pytest.approx(0.9)
        assert mat.opacity == 1.0

    def test_glass_is_transparent(self):
        mat = glass(refraction_index=1.33)
        assert mat.refraction_index == pytest.approx(1.33)
        assert mat.opacity < 1.0


class TestCheckerTexture:
    """Test the procedural checkerboard."""

    def test_alternates(self):
        checker = CheckerTexture((1, 1, 1), (0, 0, 0), squares=4)
        assert np.allclose(checker.sample(0.1, 0.1), [1, 1, 1])
        assert np.allclose(checker.sample(0.3, 0.1), [0, 0, 0])
        assert np.allclose(checker.sample(0.3, 0.3), [1, 1, 1])

    def test_tiles_beyond_unit_square(self):
        checker = CheckerTexture((1, 1, 1), (0, 0, 0), squares=2)
        assert np.allclose(checker.sample(1.1, 0.1), checker.sample(0.1, 0.1))
        assert np.allclose(checker.sample(-0.1, 0.1), [0, 0, 0])

    def test_satisfies_texture(self):
        assert isinstance(CheckerTexture((1, 1, 1), (0, 0, 0)), Texture)

    def test_invalid_squares(self):
        with pytest.raises(ValueError):
            CheckerTexture((1, 1, 1), (0, 0, 0), squares=0)


class TestImageTexture:
    """Test the bitmap texture."""

    @staticmethod
    def two_by_two():
        pixels = np.zeros((2, 2, 3), dtype=np.uint8)
        pixels[0, 0] = (255, 0, 0)  # top left
        pixels[0, 1] = (0, 255, 0)  # top right
        pixels[1, 0] = (0, 0, 255)  # bottom left
        pixels[1, 1] = (255, 255, 255)  # bottom right
        return pixels

    def test_uint8_scaled_to_unit_range(self):
        texture = ImageTexture(self.two_by_two())
        assert texture.pixels.dtype == np.float64
        assert texture.pixels.max() == pytest.approx(1.0)

    def test_nearest_lookup(self):
        texture = ImageTexture(self.two_by_two())
        assert np.allclose(texture.sample(0.25, 0.25), [1, 0, 0])
        assert np.allclose(texture.sample(0.75, 0.25), [0, 1, 0])
        assert np.allclose(texture.sample(0.25, 0.75), [0, 0, 1])
        assert np.allclose(texture.sample(0.75, 0.75), [1, 1, 1])

    def test_wraps(self):
        texture = ImageTexture(self.two_by_two())
        assert np.allclose(texture.sample(1.25, -0.75), texture.sample(0.25, 0.25))
        assert np.allclose(texture.sample(1.0, 1.0), texture.sample(0.0, 0.0))

    def test_bad_shape_rejected(self):
        with pytest.raises(ValueError):
            ImageTexture(np.zeros((4, 4)))

    def test_from_file(self, tmp_path):
        path = tmp_path / "tex.png"
        PILImage.fromarray(self.two_by_two()).save(path)

        texture = ImageTexture.from_file(path)

        assert (texture.width, texture.height) == (2, 2)
        assert texture.source == str(path)
        assert np.allclose(texture.sample(0.75, 0.75), [1, 1, 1])

    def test_from_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ImageTexture.from_file(tmp_path / "missing.png")
